"""Tests for the dependency container."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.usecases.get_ballot_details_usecase import GetBallotDetailsUseCase
from src.application.usecases.get_legislator_profile_usecase import (
    GetLegislatorProfileUseCase,
)
from src.application.usecases.sync_legislators_usecase import SyncLegislatorsUseCase
from src.infrastructure.config.settings import Settings
from src.infrastructure.di import container as container_module
from src.infrastructure.di.container import (
    Container,
    get_container,
    init_container,
    reset_container,
)
from src.infrastructure.persistence.legislator_repository_impl import (
    LegislatorRepositoryImpl,
)


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("IDENTITY_FRESHNESS_HOURS", "2")
    monkeypatch.setenv("IDENTITY_MAX_ATTEMPTS", "4")
    return Settings(env_file=None)


@pytest.fixture
def database():
    db = MagicMock()
    db.dispose = AsyncMock()
    return db


@pytest.fixture(autouse=True)
def _reset():
    reset_container()
    yield
    reset_container()


class TestContainer:
    def test_identity_cache_is_shared_by_use_cases(self, settings, database):
        container = Container(settings=settings, database=database)

        sync = container.use_cases.sync_legislators_usecase()
        ballot = container.use_cases.get_ballot_details_usecase()

        assert isinstance(sync, SyncLegislatorsUseCase)
        assert isinstance(ballot, GetBallotDetailsUseCase)
        assert container.services.identity_cache() is (
            container.services.identity_cache()
        )
        assert ballot._identity_cache is container.services.identity_cache()

    def test_profile_usecase_uses_open_data_service(self, settings, database):
        container = Container(settings=settings, database=database)

        profile = container.use_cases.get_legislator_profile_usecase()

        assert isinstance(profile, GetLegislatorProfileUseCase)
        assert profile._open_data is container.services.open_data_service()

    def test_identity_cache_config_comes_from_settings(self, settings, database):
        container = Container(settings=settings, database=database)

        config = container.services.identity_cache_config()

        assert config.freshness_window == timedelta(hours=2)
        assert config.max_attempts == 4
        assert config.placeholder_label == "Legislator"

    @pytest.mark.asyncio
    async def test_repository_scope_binds_a_session(self, settings, database):
        session = MagicMock()
        session_cm = MagicMock()
        session_cm.__aenter__ = AsyncMock(return_value=session)
        session_cm.__aexit__ = AsyncMock(return_value=None)
        database.get_session.return_value = session_cm
        container = Container(settings=settings, database=database)

        async with container.repositories.legislator_repository_scope() as repo:
            assert isinstance(repo, LegislatorRepositoryImpl)
            assert repo.session is session

        session_cm.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_disposes_database(self, settings, database):
        container = Container(settings=settings, database=database)

        await container.shutdown()

        database.dispose.assert_awaited_once()


class TestContainerLifecycle:
    def test_get_container_before_init_raises(self):
        with pytest.raises(RuntimeError):
            get_container()

    def test_init_then_get_returns_same_container(self, settings):
        created = init_container(settings)

        assert get_container() is created
        assert created.settings is settings

    def test_reset_clears_container(self, settings):
        init_container(settings)

        reset_container()

        assert container_module._container is None
