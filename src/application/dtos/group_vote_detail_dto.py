"""会派別投票詳細取得のDTO."""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.value_objects.group_vote_detail import GroupVoteDetail


@dataclass
class GetGroupVoteDetailInputDTO:
    """入力DTO."""

    group_id: str
    number: str
    legislature: str
    # 画面に表示される先頭行数。この範囲の議員は優先して名前解決する
    visible_count: int = 20
    sort_by_name: bool = True


@dataclass
class GroupVoteDetailOutputDTO:
    """出力DTO."""

    group: GroupVoteDetail | None = None
    error: bool = False
    error_message: str | None = None
    dropped_voter_count: int = 0
