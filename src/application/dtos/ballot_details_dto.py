"""スクルタン詳細取得のDTO."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.value_objects.ballot_summary import BallotSummary
from src.domain.value_objects.group_vote_detail import GroupVoteDetail


@dataclass
class GetBallotDetailsInputDTO:
    """入力DTO."""

    number: str
    legislature: str
    # 議員別内訳を先読みする会派数
    preload_groups: int = 2


@dataclass
class BallotDetailsOutputDTO:
    """出力DTO.

    error=True は「どのエンドポイントからも取得できなかった」ことを表し、
    集計が全て0の有効なスクルタンとは区別される。
    """

    summary: BallotSummary | None = None
    groups: dict[str, GroupVoteDetail] = field(default_factory=dict)
    error: bool = False
    error_message: str | None = None
    store_empty: bool = False
    dropped_voter_count: int = 0
    source_endpoint: str | None = None
