"""投票履歴CSV出力のテスト."""

import csv
import io

from src.application.dtos.legislator_votes_dto import LegislatorBallotVoteDTO
from src.domain.value_objects.vote_position import VotePosition
from src.interfaces.cli.commands.votes.export import (
    CSV_HEADERS,
    export_votes_csv,
    format_vote_date,
    write_votes_csv,
)


def _vote(**overrides) -> LegislatorBallotVoteDTO:
    values = {
        "number": "1234",
        "date": "2024-10-15",
        "title": 'l\'article 3 "bis"',
        "position": VotePosition.FOR,
    }
    values.update(overrides)
    return LegislatorBallotVoteDTO(**values)


class TestFormatVoteDate:
    def test_iso_date(self) -> None:
        assert format_vote_date("2024-10-15") == "15/10/2024"

    def test_iso_datetime_with_z(self) -> None:
        assert format_vote_date("2024-01-02T18:30:00Z") == "02/01/2024"

    def test_unparseable_value_is_kept(self) -> None:
        assert format_vote_date("inconnue") == "inconnue"

    def test_empty(self) -> None:
        assert format_vote_date("") == ""


class TestWriteVotesCsv:
    def test_quotes_every_field(self) -> None:
        stream = io.StringIO()

        count = write_votes_csv(
            [_vote(), _vote(number="12", position=VotePosition.ABSTAIN)], stream
        )

        assert count == 2
        lines = stream.getvalue().splitlines()
        assert lines[0] == '"Numéro","Date","Sujet","Position"'
        assert lines[1] == '"1234","15/10/2024","l\'article 3 ""bis""","Pour"'
        assert lines[2].endswith('"Abstention"')

    def test_empty_history_writes_header_only(self) -> None:
        stream = io.StringIO()

        assert write_votes_csv([], stream) == 0
        rows = list(csv.reader(io.StringIO(stream.getvalue())))
        assert rows == [list(CSV_HEADERS)]


class TestExportVotesCsv:
    def test_writes_utf8_file(self, tmp_path) -> None:
        path = tmp_path / "votes.csv"

        count = export_votes_csv([_vote(position=VotePosition.AGAINST)], path)

        assert count == 1
        rows = list(csv.reader(path.open(encoding="utf-8", newline="")))
        assert rows[0] == ["Numéro", "Date", "Sujet", "Position"]
        assert rows[1][3] == "Contre"
