"""Async database configuration and session management."""

import asyncio

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import ClassVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.config.settings import get_settings


def to_async_url(database_url: str) -> str:
    """postgresql:// を asyncpg ドライバのURLに書き換える."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


class AsyncDatabase:
    """Async database manager.

    イベントループごとにエンジンを管理する。CLIコマンドは asyncio.run を
    コマンドごとに呼ぶため、ループをまたいでエンジンを共有しない。
    """

    _engines: ClassVar[dict[tuple[str, int], AsyncEngine]] = {}
    _session_makers: ClassVar[
        dict[tuple[str, int], async_sessionmaker[AsyncSession]]
    ] = {}

    def __init__(self, database_url: str | None = None):
        self._async_url = to_async_url(
            database_url or get_settings().get_database_url()
        )

    def _loop_key(self) -> tuple[str, int]:
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            loop_id = 0
        return self._async_url, loop_id

    def _get_engine_and_session_maker(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        """現在のイベントループに対応するエンジンとセッションメーカーを取得する."""
        key = self._loop_key()
        if key not in self._engines:
            engine = create_async_engine(self._async_url, echo=False)
            session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
            self._engines[key] = engine
            self._session_makers[key] = session_maker

        return self._engines[key], self._session_makers[key]

    @property
    def engine(self) -> AsyncEngine:
        engine, _ = self._get_engine_and_session_maker()
        return engine

    @property
    def async_session_maker(self) -> async_sessionmaker[AsyncSession]:
        _, session_maker = self._get_engine_and_session_maker()
        return session_maker

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Get an async database session.

        正常終了時にコミットし、例外時はロールバックして再送出する。

        Yields:
            AsyncSession: Database session
        """
        async with self.async_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """現在のイベントループのエンジンを破棄する."""
        key = self._loop_key()
        engine = self._engines.pop(key, None)
        self._session_makers.pop(key, None)
        if engine is not None:
            await engine.dispose()

