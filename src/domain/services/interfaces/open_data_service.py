"""国民議会オープンデータAPIサービスのインターフェース."""

from __future__ import annotations

from typing import Any, Protocol

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


class IOpenDataService(Protocol):
    """国民議会オープンデータAPIから投票・議員データを取得するサービス.

    スクルタン系のメソッドは形式判定前の生ペイロードを返す。
    形式判定はドメインのデコーダーが担当する。
    見つからない場合（404）は None を返し、それ以外の失敗は例外を送出する。
    """

    async def fetch_ballot(
        self, number: str, legislature: str, *, alternate: bool = False
    ) -> dict[str, Any] | None:
        """スクルタン詳細を取得する.

        alternate=True の場合は代替エンドポイント (/scrutin) を使う。
        """
        ...

    async def fetch_group_vote_detail(
        self, group_id: str, number: str, legislature: str
    ) -> dict[str, Any] | None:
        """1会派分の議員別投票を取得する."""
        ...

    async def fetch_legislator(
        self, legislator_id: str, legislature: str
    ) -> Legislator | None:
        """議員IDで1名取得する."""
        ...

    async def fetch_legislator_details(
        self, legislator_id: str
    ) -> LegislatorDetailsDTO | None:
        """所属機関・連絡先を含む議員プロフィールを取得する."""
        ...

    async def fetch_recusals(self, legislator_id: str) -> list[RecusalDTO]:
        """議員が申告した投票制限を取得する。無ければ空リスト."""
        ...

    async def search_legislator(self, query: str) -> LegislatorSearchResultDTO:
        """議員IDまたは氏名で検索する."""
        ...

    async def fetch_legislator_votes(
        self, query: str
    ) -> list[LegislatorBallotVoteDTO] | None:
        """議員の投票履歴を取得する."""
        ...

    async def fetch_organ(self, organ_id: str) -> OrganDTO | None:
        """機関の詳細（メンバー一覧を含む）を取得する."""
        ...

    async def fetch_active_roster(self, legislature: str) -> list[Legislator]:
        """現職議員一覧を取得する."""
        ...

    async def fetch_full_roster(self, legislature: str) -> list[Legislator]:
        """organes と acteurs を突き合わせて会派付きの名簿全体を組み立てる."""
        ...
