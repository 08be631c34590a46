"""会派別投票詳細取得ユースケース."""

from __future__ import annotations

import logging

from src.application.dtos.group_vote_detail_dto import (
    GetGroupVoteDetailInputDTO,
    GroupVoteDetailOutputDTO,
)
from src.application.services.legislator_identity_cache import LegislatorIdentityCache
from src.domain.services.group_rollup_builder import GroupRollupBuilder
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.services.legislator_vote_extractor import LegislatorVoteExtractor


logger = logging.getLogger(__name__)


class GetGroupVoteDetailUseCase:
    """1会派の議員別投票を取得し、氏名を解決して返すユースケース."""

    def __init__(
        self,
        open_data_service: IOpenDataService,
        identity_cache: LegislatorIdentityCache,
    ) -> None:
        self._open_data = open_data_service
        self._identity_cache = identity_cache

    async def execute(
        self, input_dto: GetGroupVoteDetailInputDTO
    ) -> GroupVoteDetailOutputDTO:
        try:
            detail = await self._open_data.fetch_group_vote_detail(
                input_dto.group_id, input_dto.number, input_dto.legislature
            )
        except Exception as e:
            logger.exception("会派 %s の詳細取得に失敗", input_dto.group_id)
            return GroupVoteDetailOutputDTO(error=True, error_message=str(e))

        if detail is None:
            return GroupVoteDetailOutputDTO(
                error=True,
                error_message=(
                    f"会派 {input_dto.group_id} のスクルタン {input_dto.number} "
                    "の詳細が見つかりません"
                ),
            )

        extraction = LegislatorVoteExtractor.extract(
            detail, sort_by_name=input_dto.sort_by_name
        )
        self._identity_cache.remember_names(extraction.votes)

        visible = extraction.votes[: max(input_dto.visible_count, 0)]
        rest = extraction.votes[len(visible) :]
        await self._identity_cache.ensure_visible(
            (vote.legislator_id for vote in visible), input_dto.legislature
        )
        if rest:
            await self._identity_cache.prefetch(
                (vote.legislator_id for vote in rest), input_dto.legislature
            )

        votes = [self._identity_cache.named_vote(vote) for vote in extraction.votes]
        if input_dto.sort_by_name:
            votes.sort(key=lambda vote: (vote.last_name or vote.legislator_id).lower())
        group = GroupRollupBuilder.build_group(
            input_dto.group_id, detail
        ).with_legislator_votes(votes)
        return GroupVoteDetailOutputDTO(
            group=group, dropped_voter_count=extraction.dropped_count
        )
