"""議員名簿同期ジョブのDTO."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SyncLegislatorsInputDTO:
    """同期ジョブ入力DTO.

    full_roster=True の場合は organes + acteurs から名簿全体を組み立てる。
    False の場合は現職議員一覧エンドポイントのみを使う。
    """

    legislature: str
    force: bool = False
    full_roster: bool = True


@dataclass
class SyncLegislatorsOutputDTO:
    """同期ジョブ出力DTO."""

    success: bool = False
    message: str = ""
    legislators_count: int = 0
    fetch_errors: list[str] = field(default_factory=list)
    sync_errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """APIレスポンス互換の辞書形式."""
        return {
            "success": self.success,
            "message": self.message,
            "deputies_count": self.legislators_count,
            "fetch_errors": list(self.fetch_errors),
            "sync_errors": list(self.sync_errors),
        }
