"""asyncio ベースの IScheduler 実装."""

import asyncio

from datetime import UTC, datetime


class AsyncioScheduler:
    """実時間の時計と asyncio.sleep による待機."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
