"""議員識別情報キャッシュエントリの Value Object."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum


class IdentityState(Enum):
    """キャッシュエントリの状態.

    unrequested → loading → resolved / not_found の順にのみ遷移する。
    resolved は鮮度切れの場合に限り loading に戻る。
    """

    UNREQUESTED = "unrequested"
    LOADING = "loading"
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class LegislatorIdentity:
    """議員IDから解決された氏名情報."""

    legislator_id: str
    first_name: str = ""
    last_name: str = ""
    profession: str | None = None
    political_group: str | None = None
    political_group_id: str | None = None
    state: IdentityState = IdentityState.UNREQUESTED
    resolved_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_settled(self) -> bool:
        """resolved または not_found（これ以上の取得が不要）."""
        return self.state in (IdentityState.RESOLVED, IdentityState.NOT_FOUND)

    def is_fresh(self, now: datetime, window: timedelta) -> bool:
        """鮮度ウィンドウ内に解決済みかどうか."""
        if not self.is_settled or self.resolved_at is None:
            return False
        return now - self.resolved_at < window

    def loading(self) -> LegislatorIdentity:
        return replace(self, state=IdentityState.LOADING)
