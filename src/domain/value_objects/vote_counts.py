"""投票数集計の Value Object."""

from dataclasses import dataclass

from src.domain.value_objects.vote_position import VotePosition


@dataclass(frozen=True)
class VoteCounts:
    """スクルタン全体の集計 (votants / pour / contre / abstention).

    全て0の場合は「データなし」を意味する。抽出失敗とは区別しない。
    """

    voters: int = 0
    for_: int = 0
    against: int = 0
    abstain: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.voters or self.for_ or self.against or self.abstain)

    @property
    def expressed(self) -> int:
        """賛成・反対・棄権の合計."""
        return self.for_ + self.against + self.abstain

    def as_dict(self) -> dict[str, int]:
        return {
            "votants": self.voters,
            "pour": self.for_,
            "contre": self.against,
            "abstention": self.abstain,
        }


@dataclass(frozen=True)
class PositionCounts:
    """会派単位のポジション別人数."""

    for_: int = 0
    against: int = 0
    abstain: int = 0
    absent: int = 0

    @property
    def total(self) -> int:
        return self.for_ + self.against + self.abstain + self.absent

    def get(self, position: VotePosition) -> int:
        """ポジションに対応する人数を返す."""
        return {
            VotePosition.FOR: self.for_,
            VotePosition.AGAINST: self.against,
            VotePosition.ABSTAIN: self.abstain,
            VotePosition.ABSENT: self.absent,
        }[position]
