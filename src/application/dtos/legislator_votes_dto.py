"""議員検索・投票履歴のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.value_objects.vote_position import VotePosition


@dataclass(frozen=True)
class LegislatorProfileDTO:
    """検索でヒットした議員1名."""

    legislator_id: str
    first_name: str
    last_name: str
    profession: str = "Non renseignée"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class HomonymOptionDTO:
    """同姓同名で候補が複数ある場合の選択肢."""

    legislator_id: str
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class LegislatorSearchResultDTO:
    """議員検索の結果.

    legislator が埋まっていれば一意に特定できた。
    options が空でなければ同姓同名の候補がある。
    """

    legislator: LegislatorProfileDTO | None = None
    options: list[HomonymOptionDTO] = field(default_factory=list)
    error: bool = False
    error_message: str | None = None

    @property
    def found(self) -> bool:
        return self.legislator is not None

    @property
    def has_homonyms(self) -> bool:
        return bool(self.options)


@dataclass(frozen=True)
class LegislatorBallotVoteDTO:
    """議員の投票履歴1件."""

    number: str
    date: str
    title: str
    position: VotePosition


@dataclass
class LegislatorHistoryOutputDTO:
    """投票履歴取得の結果."""

    query: str
    votes: list[LegislatorBallotVoteDTO] = field(default_factory=list)
    error: bool = False
    error_message: str | None = None

    def count_by_position(self) -> dict[VotePosition, int]:
        """ポジション別の件数."""
        counts = {position: 0 for position in VotePosition}
        for vote in self.votes:
            counts[vote.position] += 1
        return counts
