"""OpenDataServiceImpl のテスト."""

import httpx
import pytest

from src.infrastructure.external.open_data_api.client import (
    OpenDataApiClient,
    OpenDataApiError,
)
from src.infrastructure.external.open_data_api.service import OpenDataServiceImpl


def _routes(responses: dict[str, object]):
    """パスごとに固定のJSON（または status int）を返すハンドラ."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = responses.get(request.url.path)
        if body is None:
            return httpx.Response(404)
        if isinstance(body, int):
            return httpx.Response(body)
        return httpx.Response(200, json=body)

    return handler


def _service(client: httpx.AsyncClient) -> OpenDataServiceImpl:
    return OpenDataServiceImpl(
        OpenDataApiClient(client=client, base_url="https://api.example.test")
    )


class TestOpenDataServiceImpl:
    """OpenDataServiceImpl のテスト."""

    @pytest.mark.asyncio
    async def test_fetch_ballot_standard_and_alternate(self) -> None:
        handler = _routes(
            {"/scrutin_votes_detail": {"numero": "1"}, "/scrutin": {"numero": "2"}}
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = _service(client)
            standard = await service.fetch_ballot("1", "17")
            alternate = await service.fetch_ballot("1", "17", alternate=True)

        assert standard == {"numero": "1"}
        assert alternate == {"numero": "2"}

    @pytest.mark.asyncio
    async def test_empty_ballot_payload_is_none(self) -> None:
        handler = _routes({"/scrutin_votes_detail": {}})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assert await _service(client).fetch_ballot("1", "17") is None

    @pytest.mark.asyncio
    async def test_fetch_legislator(self) -> None:
        handler = _routes(
            {
                "/depute": {
                    "prenom": "Marie",
                    "nom": "Dupont",
                    "groupe_politique": "Renaissance",
                    "groupe_politique_uid": "PO800",
                }
            }
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            legislator = await _service(client).fetch_legislator("PA1234", "17")

        assert legislator.legislator_id == "PA1234"
        assert legislator.full_name == "Marie Dupont"
        assert legislator.political_group_id == "PO800"

    @pytest.mark.asyncio
    async def test_fetch_legislator_not_found(self) -> None:
        handler = _routes({})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assert await _service(client).fetch_legislator("PA1", "17") is None

    @pytest.mark.asyncio
    async def test_fetch_legislator_votes(self) -> None:
        handler = _routes(
            {"/votes": [{"numero": "5", "date": "2024-10-01", "position": "contre"}]}
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            votes = await _service(client).fetch_legislator_votes("PA1")

        assert len(votes) == 1
        assert votes[0].number == "5"

    @pytest.mark.asyncio
    async def test_fetch_legislator_votes_not_found(self) -> None:
        handler = _routes({})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assert await _service(client).fetch_legislator_votes("Inconnu") is None

    @pytest.mark.asyncio
    async def test_fetch_active_roster(self) -> None:
        handler = _routes(
            {
                "/deputes": {
                    "deputes": [
                        {"uid": "1", "prenom": "Marie", "nom": "Dupont"},
                        {"prenom": "Sans", "nom": "ID"},
                    ]
                }
            }
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            roster = await _service(client).fetch_active_roster("17")

        assert [legislator.legislator_id for legislator in roster] == ["PA1"]

    @pytest.mark.asyncio
    async def test_fetch_full_roster(self) -> None:
        handler = _routes(
            {
                "/organes": [{"uid": "PO1", "codeType": "GP", "libelle": "Groupe"}],
                "/acteurs": [
                    {
                        "uid": "PA1",
                        "etatCivil": {"ident": {"prenom": "Marie", "nom": "Dupont"}},
                        "mandats": {"mandat": {"organes": {"organeRef": "PO1"}}},
                    }
                ],
            }
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            roster = await _service(client).fetch_full_roster("17")

        assert len(roster) == 1
        assert roster[0].political_group == "Groupe"

    @pytest.mark.asyncio
    async def test_full_roster_propagates_errors(self) -> None:
        handler = _routes({"/organes": 503})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(OpenDataApiError):
                await _service(client).fetch_full_roster("17")

    @pytest.mark.asyncio
    async def test_fetch_organ(self) -> None:
        handler = _routes(
            {
                "/organes": {
                    "uid": "PO1",
                    "libelle": "Groupe",
                    "membres": [{"uid": "PA1"}],
                }
            }
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            organ = await _service(client).fetch_organ("PO1")

        assert organ.member_ids == ("PA1",)

    @pytest.mark.asyncio
    async def test_fetch_legislator_details(self) -> None:
        handler = _routes(
            {
                "/depute": {
                    "id": "PA1234",
                    "prenom": "Marie",
                    "nom": "Dupont",
                    "civilite": "Mme",
                    "organes": [{"type": "GP", "nom": "Renaissance"}],
                    "contacts": [{"type": "Mèl", "valeur": "marie@example.test"}],
                }
            }
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            details = await _service(client).fetch_legislator_details("PA1234")

        assert details.title == "Mme Marie Dupont"
        assert details.organs[0].type_label == "Groupe politique"
        assert details.contacts[0].value == "marie@example.test"

    @pytest.mark.asyncio
    async def test_fetch_recusals(self) -> None:
        handler = _routes(
            {"/deports": [{"id": "D1", "portee": "Vote", "cible": "Projet X"}]}
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            recusals = await _service(client).fetch_recusals("PA1234")

        assert [r.target for r in recusals] == ["Projet X"]

    @pytest.mark.asyncio
    async def test_fetch_recusals_not_found_is_empty(self) -> None:
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(_routes({}))
        ) as client:
            assert await _service(client).fetch_recusals("PA1234") == []

    @pytest.mark.asyncio
    async def test_fetch_recusals_server_error_raises(self) -> None:
        handler = _routes({"/deports": 500})
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(OpenDataApiError):
                await _service(client).fetch_recusals("PA1234")
