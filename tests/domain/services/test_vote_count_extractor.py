"""スクルタン集計抽出のテスト."""

from src.domain.services.vote_count_extractor import (
    NO_STRATEGY,
    VoteCountExtractor,
    extract_vote_counts,
)
from src.domain.value_objects.vote_counts import VoteCounts


def _voters(count: int) -> dict:
    return {"votant": [{"acteurRef": f"PA{i}"} for i in range(count)]}


class TestExtractVoteCounts:
    """extract_vote_counts のテスト."""

    def test_empty_payload_is_all_zero(self) -> None:
        counts = extract_vote_counts({})
        assert counts == VoteCounts()
        assert counts.is_empty

    def test_non_mapping_payload_is_all_zero(self) -> None:
        assert extract_vote_counts(None) == VoteCounts()
        assert extract_vote_counts([1, 2]) == VoteCounts()

    def test_group_vote_lists(self) -> None:
        """groupes[].votes の名簿から数える."""
        payload = {
            "groupes": [
                {"votes": {"pours": _voters(2), "contres": _voters(1)}},
                {"votes": {"pours": _voters(1), "abstentions": _voters(3)}},
            ]
        }
        result = VoteCountExtractor.extract_with_strategy(payload)

        assert result.strategy == "group_vote_lists"
        assert result.counts == VoteCounts(voters=7, for_=3, against=1, abstain=3)

    def test_synthese_vote(self) -> None:
        payload = {
            "syntheseVote": {
                "nombreVotants": "560",
                "decompte": {"pour": "300", "contre": "200", "abstentions": "50"},
            }
        }
        counts = extract_vote_counts(payload)
        assert counts == VoteCounts(voters=560, for_=300, against=200, abstain=50)

    def test_flat_fields(self) -> None:
        payload = {
            "nombreVotants": 10,
            "nombrePour": 6,
            "nombreContre": 3,
            "nombreAbstentions": 1,
        }
        assert extract_vote_counts(payload) == VoteCounts(10, 6, 3, 1)

    def test_mise_au_point(self) -> None:
        payload = {
            "miseAuPoint": {
                "nombreVotants": 5,
                "pour": 3,
                "contre": 2,
                "abstentions": 0,
            }
        }
        assert extract_vote_counts(payload) == VoteCounts(5, 3, 2, 0)

    def test_decompte_voix(self) -> None:
        payload = {
            "scrutin": {
                "nombreVotants": "9",
                "decompteVoix": {"pour": "4", "contre": "4", "abstentions": "1"},
            }
        }
        assert extract_vote_counts(payload) == VoteCounts(9, 4, 4, 1)

    def test_decompte_nominatif(self) -> None:
        """名簿形式: votants は内訳の合計になる."""
        payload = {
            "scrutin": {
                "decompteNominatif": {
                    "pours": {"votant": [{"acteurRef": "PA1"}, {"acteurRef": "PA2"}]},
                    "contres": {"votant": {"acteurRef": "PA3"}},
                }
            }
        }
        assert extract_vote_counts(payload) == VoteCounts(
            voters=3, for_=2, against=1, abstain=0
        )

    def test_group_numeric_votes(self) -> None:
        payload = {
            "groupes": {
                "PO1": {"vote": {"pour": 10, "contre": 2, "abstention": 1}},
                "PO2": {"vote": {"pour": "5"}},
            }
        }
        result = VoteCountExtractor.extract_with_strategy(payload)

        assert result.strategy == "group_numeric_votes"
        assert result.counts == VoteCounts(voters=18, for_=15, against=2, abstain=1)

    def test_voters_never_below_expressed(self) -> None:
        payload = {"nombreVotants": 1, "nombrePour": 4, "nombreContre": 0}
        counts = extract_vote_counts(payload)
        assert counts.voters >= counts.expressed

    def test_unknown_shape_has_no_strategy(self) -> None:
        result = VoteCountExtractor.extract_with_strategy({"foo": "bar"})
        assert result.strategy == NO_STRATEGY
        assert not result.matched
