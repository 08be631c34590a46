"""投票履歴のCSV出力."""

from __future__ import annotations

import csv
import logging

from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import TextIO

from src.application.dtos.legislator_votes_dto import LegislatorBallotVoteDTO


logger = logging.getLogger(__name__)

CSV_HEADERS = ("Numéro", "Date", "Sujet", "Position")


def format_vote_date(value: str) -> str:
    """ISO形式の日付を DD/MM/YYYY に変換する。解釈できなければそのまま返す."""
    if not value:
        return ""
    try:
        parsed: date = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return value
    return parsed.strftime("%d/%m/%Y")


def votes_to_rows(votes: Iterable[LegislatorBallotVoteDTO]) -> list[list[str]]:
    return [
        [vote.number, format_vote_date(vote.date), vote.title, vote.position.label]
        for vote in votes
    ]


def write_votes_csv(votes: Iterable[LegislatorBallotVoteDTO], stream: TextIO) -> int:
    """投票履歴をCSVとして書き出し、行数を返す."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_HEADERS)
    rows = votes_to_rows(votes)
    writer.writerows(rows)
    return len(rows)


def export_votes_csv(votes: Iterable[LegislatorBallotVoteDTO], path: Path) -> int:
    """投票履歴をファイルに書き出す."""
    with path.open("w", encoding="utf-8", newline="") as f:
        count = write_votes_csv(votes, f)
    logger.info("投票履歴 %d 件を %s に出力しました", count, path)
    return count
