"""時計と待機のインターフェース."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class IScheduler(Protocol):
    """現在時刻の取得と非同期待機.

    リトライや鮮度判定はこのインターフェース経由で時間を扱うため、
    テストでは偽の実装に差し替えられる。
    """

    def now(self) -> datetime:
        """現在時刻（UTC, aware）を返す."""
        ...

    async def sleep(self, seconds: float) -> None:
        """指定秒数待機する."""
        ...
