"""依存性注入コンテナ.

リポジトリ・サービス・ユースケースの組み立てを一箇所にまとめる。
LegislatorIdentityCache はコンテナごとに1つだけ生成される。
"""

from __future__ import annotations

import logging

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from src.application.services.legislator_identity_cache import (
    IdentityCacheConfig,
    LegislatorIdentityCache,
)
from src.application.usecases.get_ballot_details_usecase import GetBallotDetailsUseCase
from src.application.usecases.get_group_members_usecase import GetGroupMembersUseCase
from src.application.usecases.get_group_vote_detail_usecase import (
    GetGroupVoteDetailUseCase,
)
from src.application.usecases.get_legislator_profile_usecase import (
    GetLegislatorProfileUseCase,
)
from src.application.usecases.legislator_votes_usecase import LegislatorVotesUseCase
from src.application.usecases.sync_legislators_usecase import SyncLegislatorsUseCase
from src.domain.repositories.legislator_repository import LegislatorRepository
from src.infrastructure.config.async_database import AsyncDatabase
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.external.open_data_api.client import OpenDataApiClient
from src.infrastructure.external.open_data_api.service import OpenDataServiceImpl
from src.infrastructure.persistence.legislator_repository_impl import (
    LegislatorRepositoryImpl,
)
from src.infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler


logger = logging.getLogger(__name__)


class RepositoryProviders:
    """リポジトリの生成."""

    def __init__(self, database: AsyncDatabase) -> None:
        self._database = database

    @asynccontextmanager
    async def legislator_repository_scope(
        self,
    ) -> AsyncGenerator[LegislatorRepository]:
        """独立したセッションに束縛された LegislatorRepository を貸し出す."""
        async with self._database.get_session() as session:
            yield LegislatorRepositoryImpl(session)


class ServiceProviders:
    """外部サービス・アプリケーションサービスの生成."""

    def __init__(self, settings: Settings, repositories: RepositoryProviders) -> None:
        self._settings = settings
        self._repositories = repositories
        self._scheduler = AsyncioScheduler()
        self._open_data_service = OpenDataServiceImpl(
            OpenDataApiClient(
                base_url=settings.open_data_api_base_url,
                timeout=settings.open_data_api_timeout,
            )
        )
        self._identity_cache: LegislatorIdentityCache | None = None

    def scheduler(self) -> AsyncioScheduler:
        return self._scheduler

    def open_data_service(self) -> OpenDataServiceImpl:
        return self._open_data_service

    def identity_cache_config(self) -> IdentityCacheConfig:
        return IdentityCacheConfig(
            freshness_window=timedelta(hours=self._settings.identity_freshness_hours),
            retry_delay_seconds=self._settings.identity_retry_delay_seconds,
            max_attempts=self._settings.identity_max_attempts,
            placeholder_label=self._settings.identity_placeholder_label,
        )

    def identity_cache(self) -> LegislatorIdentityCache:
        if self._identity_cache is None:
            self._identity_cache = LegislatorIdentityCache(
                repository_scope=self._repositories.legislator_repository_scope,
                open_data_service=self._open_data_service,
                scheduler=self._scheduler,
                config=self.identity_cache_config(),
            )
        return self._identity_cache


class UseCaseProviders:
    """ユースケースの生成."""

    def __init__(
        self, repositories: RepositoryProviders, services: ServiceProviders
    ) -> None:
        self._repositories = repositories
        self._services = services

    def sync_legislators_usecase(self) -> SyncLegislatorsUseCase:
        return SyncLegislatorsUseCase(
            open_data_service=self._services.open_data_service(),
            repository_scope=self._repositories.legislator_repository_scope,
            scheduler=self._services.scheduler(),
            identity_cache=self._services.identity_cache(),
        )

    def get_ballot_details_usecase(self) -> GetBallotDetailsUseCase:
        return GetBallotDetailsUseCase(
            open_data_service=self._services.open_data_service(),
            repository_scope=self._repositories.legislator_repository_scope,
            identity_cache=self._services.identity_cache(),
            scheduler=self._services.scheduler(),
        )

    def get_group_vote_detail_usecase(self) -> GetGroupVoteDetailUseCase:
        return GetGroupVoteDetailUseCase(
            open_data_service=self._services.open_data_service(),
            identity_cache=self._services.identity_cache(),
        )

    def legislator_votes_usecase(self) -> LegislatorVotesUseCase:
        return LegislatorVotesUseCase(
            open_data_service=self._services.open_data_service(),
        )

    def get_legislator_profile_usecase(self) -> GetLegislatorProfileUseCase:
        return GetLegislatorProfileUseCase(
            open_data_service=self._services.open_data_service(),
        )

    def get_group_members_usecase(self) -> GetGroupMembersUseCase:
        return GetGroupMembersUseCase(
            open_data_service=self._services.open_data_service(),
            identity_cache=self._services.identity_cache(),
        )


class Container:
    """アプリケーション全体の依存関係."""

    def __init__(
        self,
        settings: Settings | None = None,
        database: AsyncDatabase | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.database = database or AsyncDatabase(self.settings.get_database_url())
        self.repositories = RepositoryProviders(self.database)
        self.services = ServiceProviders(self.settings, self.repositories)
        self.use_cases = UseCaseProviders(self.repositories, self.services)

    async def shutdown(self) -> None:
        """現在のイベントループのDBエンジンを破棄する."""
        await self.database.dispose()


_container: Container | None = None


def init_container(settings: Settings | None = None) -> Container:
    """コンテナを初期化する."""
    global _container
    _container = Container(settings)
    logger.debug("DIコンテナを初期化しました")
    return _container


def get_container() -> Container:
    """初期化済みのコンテナを返す.

    Raises:
        RuntimeError: init_container() より前に呼ばれた場合
    """
    if _container is None:
        raise RuntimeError("Container has not been initialized")
    return _container


def reset_container() -> None:
    """コンテナを破棄する（テスト用）."""
    global _container
    _container = None
