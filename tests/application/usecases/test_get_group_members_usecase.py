"""GetGroupMembersUseCase のテスト."""

import pytest

from src.application.dtos.group_members_dto import GetGroupMembersInputDTO, OrganDTO
from src.application.services.legislator_identity_cache import LegislatorIdentityCache
from src.application.usecases.get_group_members_usecase import GetGroupMembersUseCase
from src.domain.value_objects.legislator_identity import IdentityState
from tests.fixtures.legislator_fakes import (
    FakeOpenDataService,
    FakeScheduler,
    InMemoryLegislatorRepository,
    make_legislator,
    scope_for,
)


@pytest.fixture
def open_data() -> FakeOpenDataService:
    service = FakeOpenDataService()
    service.organs["PO800"] = OrganDTO(
        organ_id="PO800",
        name="Renaissance",
        legislature="17",
        start_date="2024-07-18",
        organ_type="GP",
        member_ids=("PA1", "PA2", "PA3"),
    )
    return service


@pytest.fixture
def repository() -> InMemoryLegislatorRepository:
    return InMemoryLegislatorRepository(
        [
            make_legislator(legislator_id="PA1", last_name="Martin"),
            make_legislator(legislator_id="PA2", last_name="Bernard"),
        ]
    )


@pytest.fixture
def usecase(open_data, repository) -> GetGroupMembersUseCase:
    cache = LegislatorIdentityCache(
        repository_scope=scope_for(repository),
        open_data_service=open_data,
        scheduler=FakeScheduler(),
    )
    return GetGroupMembersUseCase(open_data_service=open_data, identity_cache=cache)


class TestGetGroupMembersUseCase:
    """会派メンバー一覧取得のテスト."""

    @pytest.mark.asyncio
    async def test_members_sorted_by_last_name(self, usecase, repository) -> None:
        output = await usecase.execute(
            GetGroupMembersInputDTO(organ_id="PO800", legislature="17")
        )

        assert output.organ.name == "Renaissance"
        assert [m.legislator_id for m in output.members] == ["PA2", "PA1", "PA3"]
        assert output.members[2].state is IdentityState.NOT_FOUND
        assert len(repository.get_many_calls) == 1

    @pytest.mark.asyncio
    async def test_unknown_organ(self, usecase) -> None:
        output = await usecase.execute(
            GetGroupMembersInputDTO(organ_id="PO0", legislature="17")
        )

        assert output.error
        assert output.members == []
