"""会派ごとの投票内訳を表す Value Object."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from src.domain.value_objects.legislator_vote import LegislatorVote
from src.domain.value_objects.vote_counts import PositionCounts
from src.domain.value_objects.vote_position import VotePosition


@dataclass(frozen=True)
class GroupVoteDetail:
    """1スクルタンにおける1会派の参加状況.

    部分更新はせず、再取得時はインスタンスごと置き換える。
    """

    group_id: str
    name: str
    majority_position: VotePosition
    counts: PositionCounts = field(default_factory=PositionCounts)
    legislator_votes: tuple[LegislatorVote, ...] = ()

    @property
    def has_legislator_votes(self) -> bool:
        return bool(self.legislator_votes)

    def with_legislator_votes(
        self, votes: Iterable[LegislatorVote]
    ) -> GroupVoteDetail:
        """議員別内訳を差し替えた新しいインスタンスを返す."""
        return replace(self, legislator_votes=tuple(votes))
