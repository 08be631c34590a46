"""議員名簿同期ユースケース.

オープンデータAPIから議員名簿を取得し、永続ストアの legislators テーブルに
(legislator_id, legislature) をキーとして upsert する。
同じ入力で再実行しても結果は変わらない。
"""

from __future__ import annotations

import structlog

from src.application.dtos.legislator_sync_dto import (
    SyncLegislatorsInputDTO,
    SyncLegislatorsOutputDTO,
)
from src.application.services.legislator_identity_cache import LegislatorIdentityCache
from src.domain.entities.legislator import Legislator
from src.domain.repositories.legislator_repository import (
    LegislatorRepository,
    LegislatorRepositoryScope,
)
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.services.interfaces.scheduler import IScheduler
from src.domain.utils.legislator_id import ensure_legislator_id_format


logger = structlog.get_logger(__name__)

FULL_ROSTER_BATCH_SIZE = 50
INCREMENTAL_BATCH_SIZE = 5
MAX_FETCH_ATTEMPTS = 3


class SyncLegislatorsUseCase:
    """議員名簿をオープンデータAPIから永続ストアへ同期するユースケース."""

    def __init__(
        self,
        open_data_service: IOpenDataService,
        repository_scope: LegislatorRepositoryScope,
        scheduler: IScheduler,
        identity_cache: LegislatorIdentityCache | None = None,
        max_fetch_attempts: int = MAX_FETCH_ATTEMPTS,
    ) -> None:
        self._open_data = open_data_service
        self._repository_scope = repository_scope
        self._scheduler = scheduler
        self._identity_cache = identity_cache
        self._max_fetch_attempts = max_fetch_attempts

    async def execute(
        self, input_dto: SyncLegislatorsInputDTO
    ) -> SyncLegislatorsOutputDTO:
        """メイン処理: 名簿取得 → 検証 → (強制時は削除) → バッチupsert."""
        log = logger.bind(
            legislature=input_dto.legislature,
            force=input_dto.force,
            full_roster=input_dto.full_roster,
        )
        output = SyncLegislatorsOutputDTO()
        log.info("議員名簿の同期を開始")

        fetched = await self._fetch_roster(input_dto, output)
        legislators = self._prepare(fetched, input_dto.legislature)
        if not legislators:
            output.message = "議員を取得できなかったため同期を中止しました"
            log.warning(
                "同期対象の議員がいません", fetch_errors=len(output.fetch_errors)
            )
            return output

        batch_size = (
            FULL_ROSTER_BATCH_SIZE if input_dto.full_roster else INCREMENTAL_BATCH_SIZE
        )
        try:
            async with self._repository_scope() as repository:
                if input_dto.force:
                    await self._delete_existing(repository, input_dto, output)
                output.legislators_count = await self._upsert_in_batches(
                    repository, legislators, batch_size, output
                )
        except Exception as e:
            log.exception("永続ストアへの同期に失敗")
            output.sync_errors.append(f"データベース同期エラー: {e}")

        output.success = output.legislators_count > 0
        if output.success:
            output.message = f"{output.legislators_count} 名の議員を同期しました"
            if input_dto.force and self._identity_cache is not None:
                self._identity_cache.invalidate()
        else:
            output.message = "同期に失敗しました"

        log.info(
            "議員名簿の同期が完了",
            success=output.success,
            count=output.legislators_count,
            fetch_errors=len(output.fetch_errors),
            sync_errors=len(output.sync_errors),
        )
        return output

    async def _fetch_roster(
        self, input_dto: SyncLegislatorsInputDTO, output: SyncLegislatorsOutputDTO
    ) -> list[Legislator]:
        """名簿を取得する。空の間は指数バックオフで再試行する."""
        fetch = (
            self._open_data.fetch_full_roster
            if input_dto.full_roster
            else self._open_data.fetch_active_roster
        )
        for attempt in range(1, self._max_fetch_attempts + 1):
            logger.info(
                "名簿を取得中",
                attempt=attempt,
                max_attempts=self._max_fetch_attempts,
            )
            try:
                legislators = await fetch(input_dto.legislature)
            except Exception as e:
                logger.warning("名簿の取得に失敗", attempt=attempt, error=str(e))
                output.fetch_errors.append(f"試行 {attempt}: {e}")
                legislators = []
            else:
                if not legislators:
                    output.fetch_errors.append(f"試行 {attempt}: 議員を解析できませんでした")

            if legislators:
                return legislators
            if attempt < self._max_fetch_attempts:
                backoff = 2**attempt
                logger.info("名簿取得を再試行します", backoff_seconds=backoff)
                await self._scheduler.sleep(backoff)
        return []

    @staticmethod
    def _prepare(legislators: list[Legislator], legislature: str) -> list[Legislator]:
        """IDを正規化し、氏名の欠けたレコードを除き、重複を後勝ちでまとめる."""
        prepared: dict[tuple[str, str], Legislator] = {}
        for legislator in legislators:
            legislator.legislator_id = ensure_legislator_id_format(
                legislator.legislator_id
            )
            legislator.legislature = legislator.legislature or legislature
            if not legislator.legislator_id or not legislator.has_complete_name():
                logger.info(
                    "氏名またはIDの欠けた議員レコードを除外",
                    legislator_id=legislator.legislator_id,
                    first_name=legislator.first_name,
                    last_name=legislator.last_name,
                )
                continue
            prepared[legislator.natural_key()] = legislator
        return list(prepared.values())

    @staticmethod
    async def _delete_existing(
        repository: LegislatorRepository,
        input_dto: SyncLegislatorsInputDTO,
        output: SyncLegislatorsOutputDTO,
    ) -> None:
        try:
            deleted = await repository.delete_by_legislature(input_dto.legislature)
            logger.info("既存の議員を削除", deleted=deleted)
        except Exception as e:
            logger.warning("既存の議員の削除に失敗", error=str(e))
            output.sync_errors.append(f"議員の削除に失敗: {e}")

    @staticmethod
    async def _upsert_in_batches(
        repository: LegislatorRepository,
        legislators: list[Legislator],
        batch_size: int,
        output: SyncLegislatorsOutputDTO,
    ) -> int:
        """バッチごとにupsertする.

        バッチが失敗したら1度だけ再試行し、それも失敗したら1件ずつupsertする。
        sync_errors に残るのは1件単位で失敗した議員のみ。
        """
        total_batches = (len(legislators) + batch_size - 1) // batch_size
        written = 0
        for index in range(total_batches):
            batch = legislators[index * batch_size : (index + 1) * batch_size]
            log = logger.bind(batch=index + 1, total_batches=total_batches)

            for attempt in (1, 2):
                try:
                    written += await repository.upsert_many(batch)
                    log.debug("バッチをupsert", size=len(batch), attempt=attempt)
                    break
                except Exception as e:
                    log.warning("バッチupsertに失敗", attempt=attempt, error=str(e))
            else:
                log.info("1件ずつupsertします", size=len(batch))
                for legislator in batch:
                    try:
                        written += await repository.upsert_many([legislator])
                    except Exception as e:
                        log.warning(
                            "議員のupsertに失敗",
                            legislator_id=legislator.legislator_id,
                            error=str(e),
                        )
                        output.sync_errors.append(f"{legislator.legislator_id}: {e}")
        return written
