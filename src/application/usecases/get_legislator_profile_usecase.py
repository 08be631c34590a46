"""議員プロフィール取得ユースケース."""

from __future__ import annotations

import logging

from src.application.dtos.legislator_profile_dto import (
    LegislatorProfileOutputDTO,
    RecusalDTO,
)
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.utils.legislator_id import ensure_legislator_id_format, is_legislator_id


logger = logging.getLogger(__name__)


class GetLegislatorProfileUseCase:
    """議員の完全なプロフィールと投票制限を取得するユースケース.

    投票制限の取得に失敗してもプロフィールは返す。
    """

    def __init__(self, open_data_service: IOpenDataService) -> None:
        self._open_data = open_data_service

    async def execute(self, legislator_id: str) -> LegislatorProfileOutputDTO:
        cleaned = legislator_id.strip()
        if not is_legislator_id(cleaned):
            return LegislatorProfileOutputDTO(
                legislator_id=cleaned,
                error=True,
                error_message=f"議員IDの形式が不正です: {legislator_id}",
            )
        canonical = ensure_legislator_id_format(cleaned)

        try:
            details = await self._open_data.fetch_legislator_details(canonical)
        except Exception as e:
            logger.exception("議員プロフィールの取得に失敗: id=%s", canonical)
            return LegislatorProfileOutputDTO(
                legislator_id=canonical, error=True, error_message=str(e)
            )

        if details is None:
            return LegislatorProfileOutputDTO(
                legislator_id=canonical,
                error=True,
                error_message=f"議員 {canonical} が見つかりません",
            )

        recusals = await self._recusals(canonical)
        logger.info(
            "議員プロフィールを取得しました: id=%s, organs=%d, recusals=%d",
            canonical,
            len(details.organs),
            len(recusals),
        )
        return LegislatorProfileOutputDTO(
            legislator_id=canonical, details=details, recusals=recusals
        )

    async def _recusals(self, legislator_id: str) -> list[RecusalDTO]:
        try:
            return list(await self._open_data.fetch_recusals(legislator_id))
        except Exception as e:
            logger.warning("投票制限の取得に失敗: id=%s, error=%s", legislator_id, e)
            return []
