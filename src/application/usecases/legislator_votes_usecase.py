"""議員検索・投票履歴ユースケース."""

from __future__ import annotations

import logging

from src.application.dtos.legislator_votes_dto import (
    LegislatorHistoryOutputDTO,
    LegislatorSearchResultDTO,
)
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.utils.legislator_id import ensure_legislator_id_format, is_legislator_id


logger = logging.getLogger(__name__)


class LegislatorVotesUseCase:
    """議員をID・氏名で検索し、投票履歴を取得するユースケース."""

    def __init__(self, open_data_service: IOpenDataService) -> None:
        self._open_data = open_data_service

    async def search(self, query: str) -> LegislatorSearchResultDTO:
        """議員を検索する.

        PA+数字の形式ならID検索、それ以外は氏名検索。
        同姓同名の場合は options に候補が入る。
        """
        cleaned = query.strip()
        if not cleaned:
            return LegislatorSearchResultDTO(
                error=True, error_message="検索語を指定してください"
            )
        if is_legislator_id(cleaned):
            cleaned = ensure_legislator_id_format(cleaned)

        try:
            result = await self._open_data.search_legislator(cleaned)
        except Exception as e:
            logger.exception("議員検索に失敗: query=%s", cleaned)
            return LegislatorSearchResultDTO(error=True, error_message=str(e))

        if not result.found and not result.has_homonyms:
            logger.info("議員が見つかりません: query=%s", cleaned)
        return result

    async def history(self, query: str) -> LegislatorHistoryOutputDTO:
        """議員の投票履歴を取得する。見つからない場合は空の履歴."""
        cleaned = query.strip()
        if not cleaned:
            return LegislatorHistoryOutputDTO(
                query=cleaned, error=True, error_message="議員IDまたは氏名を指定してください"
            )
        if is_legislator_id(cleaned):
            cleaned = ensure_legislator_id_format(cleaned)

        try:
            votes = await self._open_data.fetch_legislator_votes(cleaned)
        except Exception as e:
            logger.exception("投票履歴の取得に失敗: query=%s", cleaned)
            return LegislatorHistoryOutputDTO(
                query=cleaned, error=True, error_message=str(e)
            )

        if votes is None:
            logger.info("投票履歴が見つかりません: query=%s", cleaned)
            return LegislatorHistoryOutputDTO(query=cleaned)

        logger.info("%d 件の投票を取得しました: query=%s", len(votes), cleaned)
        return LegislatorHistoryOutputDTO(query=cleaned, votes=list(votes))
