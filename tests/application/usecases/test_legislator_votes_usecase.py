"""LegislatorVotesUseCase のテスト."""

from unittest.mock import AsyncMock

import pytest

from src.application.dtos.legislator_votes_dto import (
    HomonymOptionDTO,
    LegislatorBallotVoteDTO,
    LegislatorProfileDTO,
    LegislatorSearchResultDTO,
)
from src.application.usecases.legislator_votes_usecase import LegislatorVotesUseCase
from src.domain.value_objects.vote_position import VotePosition


@pytest.fixture
def open_data() -> AsyncMock:
    service = AsyncMock()
    service.search_legislator.return_value = LegislatorSearchResultDTO(
        legislator=LegislatorProfileDTO("PA1234", "Marie", "Dupont")
    )
    service.fetch_legislator_votes.return_value = [
        LegislatorBallotVoteDTO("1", "2024-10-01", "Motion", VotePosition.FOR),
        LegislatorBallotVoteDTO("2", "2024-10-02", "Loi", VotePosition.AGAINST),
        LegislatorBallotVoteDTO("3", "2024-10-03", "Amendement", VotePosition.FOR),
    ]
    return service


class TestSearch:
    """search のテスト."""

    @pytest.mark.asyncio
    async def test_bare_ids_are_canonicalized(self, open_data) -> None:
        usecase = LegislatorVotesUseCase(open_data)

        result = await usecase.search(" pa1234 ")

        open_data.search_legislator.assert_awaited_once_with("PA1234")
        assert result.found
        assert result.legislator.full_name == "Marie Dupont"
        assert result.legislator.profession == "Non renseignée"

    @pytest.mark.asyncio
    async def test_names_are_passed_through(self, open_data) -> None:
        usecase = LegislatorVotesUseCase(open_data)

        await usecase.search("Dupont")

        open_data.search_legislator.assert_awaited_once_with("Dupont")

    @pytest.mark.asyncio
    async def test_homonyms(self, open_data) -> None:
        open_data.search_legislator.return_value = LegislatorSearchResultDTO(
            options=[
                HomonymOptionDTO("PA1", "Marie", "Dupont"),
                HomonymOptionDTO("PA2", "Jean", "Dupont"),
            ]
        )
        result = await LegislatorVotesUseCase(open_data).search("Dupont")

        assert not result.found
        assert result.has_homonyms
        assert [o.full_name for o in result.options] == ["Marie Dupont", "Jean Dupont"]

    @pytest.mark.asyncio
    async def test_empty_query(self, open_data) -> None:
        result = await LegislatorVotesUseCase(open_data).search("   ")

        assert result.error
        open_data.search_legislator.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_service_error(self, open_data) -> None:
        open_data.search_legislator.side_effect = RuntimeError("boom")

        result = await LegislatorVotesUseCase(open_data).search("Dupont")

        assert result.error
        assert result.error_message == "boom"


class TestHistory:
    """history のテスト."""

    @pytest.mark.asyncio
    async def test_votes_and_counts(self, open_data) -> None:
        output = await LegislatorVotesUseCase(open_data).history("PA1234")

        assert len(output.votes) == 3
        counts = output.count_by_position()
        assert counts[VotePosition.FOR] == 2
        assert counts[VotePosition.AGAINST] == 1
        assert counts[VotePosition.ABSENT] == 0

    @pytest.mark.asyncio
    async def test_not_found_is_empty_history(self, open_data) -> None:
        open_data.fetch_legislator_votes.return_value = None

        output = await LegislatorVotesUseCase(open_data).history("Inconnu")

        assert not output.error
        assert output.votes == []

    @pytest.mark.asyncio
    async def test_service_error(self, open_data) -> None:
        open_data.fetch_legislator_votes.side_effect = RuntimeError("HTTP 500")

        output = await LegislatorVotesUseCase(open_data).history("PA1234")

        assert output.error
        assert output.votes == []
