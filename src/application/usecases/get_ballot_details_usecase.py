"""スクルタン詳細取得ユースケース.

標準エンドポイント → 代替エンドポイントの順にスクルタン詳細を取得し、
集計と会派別内訳をデコードする。先頭の数会派は議員別投票まで読み込み、
登場する議員の氏名を先読みしておく。
"""

from __future__ import annotations

import logging

from src.application.dtos.ballot_details_dto import (
    BallotDetailsOutputDTO,
    GetBallotDetailsInputDTO,
)
from src.application.services.legislator_identity_cache import LegislatorIdentityCache
from src.domain.repositories.legislator_repository import LegislatorRepositoryScope
from src.domain.services.ballot_payload_decoder import BallotPayloadDecoder
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.services.interfaces.scheduler import IScheduler
from src.domain.services.legislator_vote_extractor import (
    LegislatorVoteExtraction,
    LegislatorVoteExtractor,
)
from src.domain.value_objects.group_vote_detail import GroupVoteDetail


logger = logging.getLogger(__name__)

GROUP_DETAIL_RETRIES = 2
GROUP_DETAIL_RETRY_DELAY_SECONDS = 1.0


class GetBallotDetailsUseCase:
    """スクルタン1件の詳細を取得するユースケース."""

    def __init__(
        self,
        open_data_service: IOpenDataService,
        repository_scope: LegislatorRepositoryScope,
        identity_cache: LegislatorIdentityCache,
        scheduler: IScheduler,
    ) -> None:
        self._open_data = open_data_service
        self._repository_scope = repository_scope
        self._identity_cache = identity_cache
        self._scheduler = scheduler

    async def execute(
        self, input_dto: GetBallotDetailsInputDTO
    ) -> BallotDetailsOutputDTO:
        """メイン処理: 取得 → デコード → 先頭会派の内訳読み込み → 氏名の先読み."""
        payload, endpoint = await self._fetch_payload(input_dto)
        if payload is None:
            return BallotDetailsOutputDTO(
                error=True,
                error_message=(
                    f"スクルタン {input_dto.number} の詳細をどのエンドポイントからも"
                    "取得できませんでした"
                ),
            )

        decoded = BallotPayloadDecoder.decode(
            payload, number=input_dto.number, legislature=input_dto.legislature
        )
        output = BallotDetailsOutputDTO(
            summary=decoded.summary,
            groups=dict(decoded.groups),
            source_endpoint=endpoint,
        )

        group_ids = list(output.groups)[: max(input_dto.preload_groups, 0)]
        for group_id in group_ids:
            extraction = await self._load_group_votes(group_id, input_dto)
            if extraction is None:
                continue
            output.dropped_voter_count += extraction.dropped_count
            output.groups[group_id] = output.groups[group_id].with_legislator_votes(
                extraction.votes
            )

        output.store_empty = await self._store_is_empty(input_dto.legislature)
        await self._prefetch_identities(output, input_dto.legislature)
        return output

    async def _fetch_payload(
        self, input_dto: GetBallotDetailsInputDTO
    ) -> tuple[dict | None, str | None]:
        for endpoint, alternate in (("standard", False), ("alternate", True)):
            try:
                payload = await self._open_data.fetch_ballot(
                    input_dto.number, input_dto.legislature, alternate=alternate
                )
            except Exception as e:
                logger.warning(
                    "%s エンドポイントでの取得に失敗: scrutin=%s, error=%s",
                    endpoint,
                    input_dto.number,
                    e,
                )
                continue
            if payload:
                logger.info(
                    "スクルタン %s を %s エンドポイントから取得しました",
                    input_dto.number,
                    endpoint,
                )
                return payload, endpoint
        return None, None

    async def _load_group_votes(
        self, group_id: str, input_dto: GetBallotDetailsInputDTO
    ) -> LegislatorVoteExtraction | None:
        """会派別詳細を取得して議員別投票を抽出する。失敗時は None."""
        for attempt in range(GROUP_DETAIL_RETRIES + 1):
            try:
                detail = await self._open_data.fetch_group_vote_detail(
                    group_id, input_dto.number, input_dto.legislature
                )
                return LegislatorVoteExtractor.extract(detail)
            except Exception as e:
                logger.warning(
                    "会派 %s の詳細取得に失敗 (試行 %d): %s", group_id, attempt + 1, e
                )
                if attempt < GROUP_DETAIL_RETRIES:
                    await self._scheduler.sleep(GROUP_DETAIL_RETRY_DELAY_SECONDS)
        return None

    async def _store_is_empty(self, legislature: str) -> bool:
        try:
            async with self._repository_scope() as repository:
                return await repository.count_by_legislature(legislature) == 0
        except Exception as e:
            logger.warning("議員テーブルの件数確認に失敗: %s", e)
            return False

    async def _prefetch_identities(
        self, output: BallotDetailsOutputDTO, legislature: str
    ) -> None:
        """読み込んだ会派の議員名を先読みし、解決済みの氏名で内訳を置き換える."""
        groups: dict[str, GroupVoteDetail] = {
            group_id: group
            for group_id, group in output.groups.items()
            if group.has_legislator_votes
        }
        votes = [vote for group in groups.values() for vote in group.legislator_votes]
        if not votes:
            return
        self._identity_cache.remember_names(votes)
        if output.store_empty:
            logger.info("議員テーブルが空のため氏名の先読みをスキップします（同期が必要）")
        else:
            await self._identity_cache.prefetch(
                (vote.legislator_id for vote in votes), legislature
            )
        cache = self._identity_cache
        for group_id, group in groups.items():
            named = sorted(
                (cache.named_vote(vote) for vote in group.legislator_votes),
                key=lambda vote: (vote.last_name or vote.legislator_id).lower(),
            )
            output.groups[group_id] = group.with_legislator_votes(named)
