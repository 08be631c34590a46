"""会派・機関メンバー一覧取得ユースケース."""

from __future__ import annotations

import logging

from src.application.dtos.group_members_dto import (
    GetGroupMembersInputDTO,
    GroupMembersOutputDTO,
)
from src.application.services.legislator_identity_cache import LegislatorIdentityCache
from src.domain.services.interfaces.open_data_service import IOpenDataService


logger = logging.getLogger(__name__)


class GetGroupMembersUseCase:
    """機関の詳細を取得し、メンバーの氏名を解決して返すユースケース."""

    def __init__(
        self,
        open_data_service: IOpenDataService,
        identity_cache: LegislatorIdentityCache,
    ) -> None:
        self._open_data = open_data_service
        self._identity_cache = identity_cache

    async def execute(
        self, input_dto: GetGroupMembersInputDTO
    ) -> GroupMembersOutputDTO:
        try:
            organ = await self._open_data.fetch_organ(input_dto.organ_id)
        except Exception as e:
            logger.exception("機関 %s の取得に失敗", input_dto.organ_id)
            return GroupMembersOutputDTO(error=True, error_message=str(e))

        if organ is None:
            return GroupMembersOutputDTO(
                error=True, error_message=f"機関 {input_dto.organ_id} が見つかりません"
            )

        await self._identity_cache.prefetch(organ.member_ids, input_dto.legislature)
        members = [
            self._identity_cache.peek(member_id) for member_id in organ.member_ids
        ]
        members.sort(
            key=lambda member: (member.last_name or member.legislator_id).lower()
        )
        logger.info("機関 %s のメンバー %d 名を取得しました", organ.organ_id, len(members))
        return GroupMembersOutputDTO(organ=organ, members=members)
