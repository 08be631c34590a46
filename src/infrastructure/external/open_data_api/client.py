"""国民議会オープンデータAPIクライアント.

httpx asyncベースのHTTPクライアント。スクルタン詳細・会派別詳細・議員・
投票制限・機関・名簿の各エンドポイントに対応する。
"""

from __future__ import annotations

import logging

from typing import Any

import httpx

from src.domain.utils.legislator_id import is_legislator_id


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-dataan.onrender.com"


class OpenDataApiError(Exception):
    """オープンデータAPIクライアントのエラー."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class OpenDataApiClient:
    """国民議会オープンデータAPIクライアント (httpx async)."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._external_client = client
        self._owns_client = client is None
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTPクライアントを取得（外部注入 or 自動生成）."""
        if self._external_client is not None:
            return self._external_client
        return httpx.AsyncClient(
            timeout=self._timeout, headers={"Cache-Control": "no-cache"}
        )

    async def get_ballot_detail(self, number: str, legislature: str) -> Any:
        """スクルタン詳細（標準エンドポイント）."""
        return await self._request_optional(
            "scrutin_votes_detail",
            {"scrutin_numero": number, "legislature": legislature},
        )

    async def get_ballot(self, number: str, legislature: str) -> Any:
        """スクルタン詳細（代替エンドポイント）."""
        return await self._request_optional(
            "scrutin", {"numero": number, "legislature": legislature}
        )

    async def get_group_vote_detail(
        self, group_id: str, number: str, legislature: str
    ) -> Any:
        """1会派分の議員別投票."""
        return await self._request_optional(
            "groupe_vote_detail",
            {
                "organe_id": group_id,
                "scrutin_numero": number,
                "legislature": legislature,
            },
        )

    async def get_legislator(self, legislator_id: str) -> Any:
        """議員IDで議員詳細を取得."""
        return await self._request_optional(
            "depute", {"depute_id": legislator_id.strip()}
        )

    async def get_recusals(self, legislator_id: str) -> Any:
        """議員が申告した投票制限 (déports)."""
        return await self._request_optional(
            "deports", {"depute_id": legislator_id.strip()}
        )

    async def search_legislator(self, query: str) -> Any:
        """議員検索。PA+数字ならID検索、それ以外は氏名検索."""
        return await self._request_optional("depute", self._query_params(query))

    async def get_legislator_votes(self, query: str) -> Any:
        """議員の投票履歴."""
        return await self._request_optional("votes", self._query_params(query))

    async def get_organ(self, organ_id: str) -> Any:
        """機関詳細."""
        return await self._request_optional("organes", {"organe_id": organ_id.strip()})

    async def list_organs(self, legislature: str) -> Any:
        """立法期の機関一覧."""
        return await self._request("organes", {"legislature": legislature})

    async def list_actors(self, legislature: str) -> Any:
        """立法期のアクター（議員）一覧."""
        return await self._request("acteurs", {"legislature": legislature})

    async def list_active_legislators(self, legislature: str) -> Any:
        """現職議員一覧."""
        return await self._request("deputes", {"legislature": legislature})

    async def _request_optional(self, endpoint: str, params: dict[str, Any]) -> Any:
        """404 を None として返すリクエスト."""
        try:
            return await self._request(endpoint, params)
        except OpenDataApiError as e:
            if e.is_not_found:
                logger.debug("404: endpoint=%s, params=%s", endpoint, params)
                return None
            raise

    async def _request(self, endpoint: str, params: dict[str, Any]) -> Any:
        """APIリクエスト実行."""
        url = f"{self._base_url}/{endpoint}"
        client = await self._get_client()

        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise OpenDataApiError(
                f"APIリクエストエラー: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise OpenDataApiError("APIリクエストタイムアウト") from e
        except httpx.HTTPError as e:
            raise OpenDataApiError(f"HTTPエラー: {e}") from e
        except ValueError as e:
            raise OpenDataApiError(f"JSONデコードエラー: {e}") from e
        finally:
            if self._owns_client:
                await client.aclose()

    @staticmethod
    def _query_params(query: str) -> dict[str, str]:
        cleaned = query.strip()
        if is_legislator_id(cleaned):
            return {"depute_id": cleaned}
        return {"nom": cleaned}
