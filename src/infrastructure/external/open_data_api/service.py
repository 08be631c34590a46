"""IOpenDataService のインフラストラクチャ実装.

OpenDataApiClient をラップし、APIレスポンスをドメイン型とApplication DTOに変換する。
"""

from __future__ import annotations

import logging

from collections.abc import Mapping
from typing import Any

from src.application.dtos.group_members_dto import OrganDTO
from src.application.dtos.legislator_profile_dto import (
    LegislatorDetailsDTO,
    RecusalDTO,
)
from src.application.dtos.legislator_votes_dto import (
    LegislatorBallotVoteDTO,
    LegislatorSearchResultDTO,
)
from src.domain.entities.legislator import Legislator
from src.infrastructure.external.open_data_api.client import OpenDataApiClient
from src.infrastructure.external.open_data_api.converter import OpenDataConverter


logger = logging.getLogger(__name__)


def _as_payload(data: Any) -> dict[str, Any] | None:
    if isinstance(data, Mapping) and data:
        return dict(data)
    return None


class OpenDataServiceImpl:
    """IOpenDataService の具象実装."""

    def __init__(self, client: OpenDataApiClient | None = None) -> None:
        self._client = client or OpenDataApiClient()
        self._converter = OpenDataConverter()

    async def fetch_ballot(
        self, number: str, legislature: str, *, alternate: bool = False
    ) -> dict[str, Any] | None:
        """スクルタン詳細の生ペイロードを返す."""
        if alternate:
            data = await self._client.get_ballot(number, legislature)
        else:
            data = await self._client.get_ballot_detail(number, legislature)
        return _as_payload(data)

    async def fetch_group_vote_detail(
        self, group_id: str, number: str, legislature: str
    ) -> dict[str, Any] | None:
        """会派別詳細の生ペイロードを返す."""
        data = await self._client.get_group_vote_detail(group_id, number, legislature)
        return _as_payload(data)

    async def fetch_legislator(
        self, legislator_id: str, legislature: str
    ) -> Legislator | None:
        """議員詳細を Legislator に変換して返す."""
        data = await self._client.get_legislator(legislator_id)
        return self._converter.legislator_from_detail(
            data, legislature, fallback_id=legislator_id
        )

    async def fetch_legislator_details(
        self, legislator_id: str
    ) -> LegislatorDetailsDTO | None:
        """所属機関・連絡先を含む議員プロフィールを返す."""
        data = await self._client.get_legislator(legislator_id)
        return self._converter.legislator_details(data, fallback_id=legislator_id)

    async def fetch_recusals(self, legislator_id: str) -> list[RecusalDTO]:
        """議員の投票制限を返す。404 は空リスト."""
        data = await self._client.get_recusals(legislator_id)
        if data is None:
            return []
        return self._converter.recusals(data)

    async def search_legislator(self, query: str) -> LegislatorSearchResultDTO:
        data = await self._client.search_legislator(query)
        return self._converter.search_result(data)

    async def fetch_legislator_votes(
        self, query: str
    ) -> list[LegislatorBallotVoteDTO] | None:
        data = await self._client.get_legislator_votes(query)
        if data is None:
            return None
        return self._converter.ballot_votes(data)

    async def fetch_organ(self, organ_id: str) -> OrganDTO | None:
        data = await self._client.get_organ(organ_id)
        return self._converter.organ(data)

    async def fetch_active_roster(self, legislature: str) -> list[Legislator]:
        """現職議員一覧を Legislator の列に変換して返す."""
        data = await self._client.list_active_legislators(legislature)
        entries = self._converter.roster_entries(data)
        legislators = [
            legislator
            for legislator in (
                self._converter.legislator_from_roster_entry(entry, legislature)
                for entry in entries
            )
            if legislator is not None
        ]
        logger.info(
            "現職議員一覧を取得しました: entries=%d, legislators=%d",
            len(entries),
            len(legislators),
        )
        return legislators

    async def fetch_full_roster(self, legislature: str) -> list[Legislator]:
        """organes と acteurs を取得し、会派付きの名簿を返す."""
        organs = await self._client.list_organs(legislature)
        actors = await self._client.list_actors(legislature)
        return self._converter.full_roster(organs, actors, legislature)
