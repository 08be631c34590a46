"""GetLegislatorProfileUseCase のテスト."""

import pytest

from src.application.dtos.legislator_profile_dto import (
    LegislatorDetailsDTO,
    RecusalDTO,
)
from src.application.usecases.get_legislator_profile_usecase import (
    GetLegislatorProfileUseCase,
)
from tests.fixtures.legislator_fakes import FakeOpenDataService


def _details() -> LegislatorDetailsDTO:
    return LegislatorDetailsDTO(
        legislator_id="PA1234", first_name="Marie", last_name="Dupont", civility="Mme"
    )


class TestGetLegislatorProfileUseCase:
    """議員プロフィール取得のテスト."""

    @pytest.fixture
    def open_data(self) -> FakeOpenDataService:
        service = FakeOpenDataService()
        service.details["PA1234"] = _details()
        service.recusals["PA1234"] = [RecusalDTO(recusal_id="D1", scope="Vote")]
        return service

    @pytest.fixture
    def usecase(self, open_data) -> GetLegislatorProfileUseCase:
        return GetLegislatorProfileUseCase(open_data_service=open_data)

    @pytest.mark.asyncio
    async def test_profile_with_recusals(self, usecase) -> None:
        output = await usecase.execute(" pa1234 ")

        assert not output.error
        assert output.legislator_id == "PA1234"
        assert output.details.title == "Mme Marie Dupont"
        assert [r.recusal_id for r in output.recusals] == ["D1"]

    @pytest.mark.asyncio
    async def test_invalid_id_is_error(self, usecase) -> None:
        output = await usecase.execute("Marie Dupont")

        assert output.error
        assert "形式" in output.error_message

    @pytest.mark.asyncio
    async def test_not_found(self, usecase) -> None:
        output = await usecase.execute("PA9")

        assert output.error
        assert output.details is None

    @pytest.mark.asyncio
    async def test_details_failure_is_error(self, usecase, open_data) -> None:
        open_data.details["PA1234"] = RuntimeError("API down")

        output = await usecase.execute("PA1234")

        assert output.error
        assert output.error_message == "API down"

    @pytest.mark.asyncio
    async def test_recusal_failure_keeps_profile(self, usecase, open_data) -> None:
        open_data.recusals["PA1234"] = RuntimeError("deports unavailable")

        output = await usecase.execute("PA1234")

        assert not output.error
        assert output.details is not None
        assert output.recusals == []
