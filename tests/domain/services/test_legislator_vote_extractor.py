"""会派詳細からの議員別投票抽出のテスト."""

from src.domain.services.legislator_vote_extractor import (
    LegislatorVoteExtractor,
    extract_legislator_votes,
)
from src.domain.value_objects.vote_position import VotePosition


def _voter(ref: object, **overrides: object) -> dict:
    """テスト用の投票者エントリを生成."""
    voter: dict = {"acteurRef": ref}
    voter.update(overrides)
    return voter


class TestExtractLegislatorVotes:
    """extract_legislator_votes のテスト."""

    def test_buckets_map_to_positions(self) -> None:
        detail = {
            "decompte": {
                "pours": {"votant": [_voter("PA1", nom="Bernard")]},
                "contres": {"votant": _voter("PA2", nom="Aubry")},
                "abstentions": {"votant": [_voter("PA3", nom="Dupont")]},
                "nonVotants": {"votant": [_voter("PA4", nom="Martin")]},
            }
        }
        result = extract_legislator_votes(detail)

        positions = {vote.legislator_id: vote.position for vote in result.votes}
        assert positions == {
            "PA1": VotePosition.FOR,
            "PA2": VotePosition.AGAINST,
            "PA3": VotePosition.ABSTAIN,
            "PA4": VotePosition.ABSENT,
        }
        assert result.dropped_count == 0

    def test_text_node_and_string_ref_resolve_to_same_id(self) -> None:
        """acteurRef の #text ノードと文字列は同じIDになる."""
        as_node = extract_legislator_votes(
            {"decompte": {"pours": {"votant": [_voter({"#text": "PA1234"})]}}}
        )
        as_string = extract_legislator_votes(
            {"decompte": {"pours": {"votant": [_voter("PA1234")]}}}
        )

        assert as_node.votes == as_string.votes
        assert as_node.votes[0].legislator_id == "PA1234"

    def test_ids_are_canonicalized(self) -> None:
        result = extract_legislator_votes(
            {"votes": {"pour": {"votant": [_voter("795")]}}}
        )
        assert result.votes[0].legislator_id == "PA795"

    def test_id_field_fallback(self) -> None:
        result = extract_legislator_votes({"pours": {"votant": [{"id": "PA9"}]}})
        assert result.votes[0].legislator_id == "PA9"

    def test_voters_without_id_are_dropped_and_counted(self) -> None:
        detail = {
            "decompte": {
                "pours": {"votant": [_voter("PA1"), {"nom": "Inconnu"}, _voter("")]}
            }
        }
        result = extract_legislator_votes(detail)

        assert [vote.legislator_id for vote in result.votes] == ["PA1"]
        assert result.dropped_count == 2

    def test_delegation_and_cause(self) -> None:
        detail = {
            "decompte": {
                "pours": {
                    "votant": [
                        _voter("PA1", parDelegation="true"),
                        _voter("PA2", parDelegation="false"),
                        _voter("PA3", parDelegation=True),
                    ]
                },
                "nonVotants": {"votant": [_voter("PA4", causePosition="PAN")]},
            }
        }
        votes = {v.legislator_id: v for v in extract_legislator_votes(detail).votes}

        assert votes["PA1"].delegation
        assert not votes["PA2"].delegation
        assert votes["PA3"].delegation
        assert votes["PA4"].cause == "PAN"
        assert votes["PA4"].cause_label == "Président"

    def test_sorted_by_last_name_then_id(self) -> None:
        detail = {
            "decompte": {
                "pours": {"votant": [_voter("PA1", nom="Zola"), _voter("PA2")]},
                "contres": {"votant": [_voter("PA3", nom="bernard")]},
            }
        }
        ids = [v.legislator_id for v in extract_legislator_votes(detail).votes]
        assert ids == ["PA3", "PA2", "PA1"]

    def test_bucket_order_without_sorting(self) -> None:
        detail = {
            "decompte": {
                "contres": {"votant": [_voter("PA3", nom="Aubry")]},
                "pours": {"votant": [_voter("PA1", nom="Zola")]},
            }
        }
        result = extract_legislator_votes(detail, sort_by_name=False)
        assert [v.legislator_id for v in result.votes] == ["PA1", "PA3"]

    def test_container_priority(self) -> None:
        """decompte に内訳があれば votes より優先する."""
        detail = {
            "decompte": {"pours": {"votant": [_voter("PA1")]}},
            "votes": {"pours": {"votant": [_voter("PA2")]}},
        }
        container = LegislatorVoteExtractor.find_container(detail)
        assert container is detail["decompte"]

    def test_missing_data_is_empty(self) -> None:
        assert extract_legislator_votes({}).votes == ()
        assert extract_legislator_votes(None).votes == ()
        assert extract_legislator_votes({"decompte": {}}).dropped_count == 0

    def test_scalar_counts_are_not_voters(self) -> None:
        """decompte に人数しか無ければ votes の名簿を使う."""
        detail = {
            "decompte": {"pour": "12", "contre": 3},
            "votes": {"pours": {"votant": [_voter("PA1"), _voter("PA2")]}},
        }
        result = extract_legislator_votes(detail)

        assert [v.legislator_id for v in result.votes] == ["PA1", "PA2"]
        assert result.dropped_count == 0

    def test_scalar_bucket_next_to_voter_list(self) -> None:
        detail = {
            "decompte": {
                "pour": "12",
                "contres": [_voter("PA3"), 7],
            }
        }
        result = extract_legislator_votes(detail)

        assert [v.legislator_id for v in result.votes] == ["PA3"]
        assert result.dropped_count == 0
