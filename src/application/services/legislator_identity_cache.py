"""議員識別情報キャッシュ.

議員IDから氏名を解決する3層キャッシュ。
メモリ → 永続ストア → 一括先読みで得たフォールバック → リモートAPI
の順に問い合わせ、どこにも無ければプレースホルダ名で確定させる。

同じIDへの同時解決要求は1つのタスクにまとめられ、
各層へのI/Oは1回しか発生しない。
"""

from __future__ import annotations

import asyncio
import logging

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import timedelta
from enum import Enum

from src.domain.entities.legislator import Legislator
from src.domain.repositories.legislator_repository import LegislatorRepositoryScope
from src.domain.services.interfaces.open_data_service import IOpenDataService
from src.domain.services.interfaces.scheduler import IScheduler
from src.domain.utils.legislator_id import ensure_legislator_id_format, numeric_suffix
from src.domain.value_objects.legislator_identity import (
    IdentityState,
    LegislatorIdentity,
)
from src.domain.value_objects.legislator_vote import LegislatorVote


logger = logging.getLogger(__name__)


class Priority(Enum):
    """解決要求の優先度."""

    NORMAL = "normal"
    # 画面に表示中。自動リトライの対象になる
    VISIBLE = "visible"


@dataclass(frozen=True)
class IdentityCacheConfig:
    """キャッシュの動作パラメータ."""

    freshness_window: timedelta = timedelta(hours=24)
    retry_delay_seconds: float = 10.0
    max_attempts: int = 3
    placeholder_label: str = "Legislator"
    remote_concurrency: int = 10


@dataclass(frozen=True)
class PrefetchResult:
    """一括先読みの内訳."""

    requested: int = 0
    already_fresh: int = 0
    from_store: int = 0
    from_fallback: int = 0
    resolved_individually: int = 0


def _log_notification(message: str) -> None:
    logger.warning(message)


def _canonical_keys(legislator_ids: Iterable[str]) -> list[str]:
    """正規化して重複と空IDを除いた議員IDのリスト（入力順）."""
    return list(
        dict.fromkeys(
            key
            for key in (ensure_legislator_id_format(i) for i in legislator_ids)
            if key
        )
    )


def identity_from_legislator(
    legislator: Legislator, state: IdentityState = IdentityState.RESOLVED
) -> LegislatorIdentity:
    """永続ストア・APIの議員レコードをキャッシュエントリに変換する."""
    return LegislatorIdentity(
        legislator_id=ensure_legislator_id_format(legislator.legislator_id),
        first_name=legislator.first_name,
        last_name=legislator.last_name,
        profession=legislator.profession,
        political_group=legislator.political_group,
        political_group_id=legislator.political_group_id,
        state=state,
    )


class LegislatorIdentityCache:
    """議員ID → 氏名の解決とキャッシュ.

    エントリは unrequested → loading → resolved / not_found の順にのみ進む。
    resolved は鮮度切れのときだけ loading に戻り、その間も氏名は保持する。
    """

    def __init__(
        self,
        repository_scope: LegislatorRepositoryScope,
        open_data_service: IOpenDataService,
        scheduler: IScheduler,
        config: IdentityCacheConfig | None = None,
        notifier: Callable[[str], None] | None = None,
    ) -> None:
        self._repository_scope = repository_scope
        self._open_data = open_data_service
        self._scheduler = scheduler
        self._config = config or IdentityCacheConfig()
        self._notify = notifier or _log_notification

        self._entries: dict[str, LegislatorIdentity] = {}
        self._fallback: dict[str, LegislatorIdentity] = {}
        self._in_flight: dict[str, asyncio.Task[LegislatorIdentity]] = {}
        self._attempts: dict[str, int] = {}
        self._visible: dict[str, str] = {}
        self._remote_slots = asyncio.Semaphore(self._config.remote_concurrency)
        self._generation = 0

    @property
    def config(self) -> IdentityCacheConfig:
        return self._config

    def peek(self, legislator_id: str) -> LegislatorIdentity:
        """メモリ上のエントリを返す。I/Oは行わない."""
        key = ensure_legislator_id_format(legislator_id)
        return self._entries.get(key) or LegislatorIdentity(legislator_id=key)

    def placeholder_name(self, legislator_id: str) -> str:
        """解決できない議員の表示名 (例: "Legislator 1234")."""
        return f"{self._config.placeholder_label} {numeric_suffix(legislator_id)}"

    def display_name(self, legislator_id: str) -> str:
        """解決済みなら「名 姓」、それ以外はプレースホルダ名."""
        entry = self.peek(legislator_id)
        if entry.full_name and entry.state is not IdentityState.NOT_FOUND:
            return entry.full_name
        return self.placeholder_name(entry.legislator_id)

    def attempts(self, legislator_id: str) -> int:
        """これまでに開始した取得試行の回数."""
        return self._attempts.get(ensure_legislator_id_format(legislator_id), 0)

    def remember_names(self, votes: Iterable[LegislatorVote]) -> int:
        """投票ペイロードに含まれていた氏名をフォールバックとして覚える.

        Returns:
            新たに覚えた件数
        """
        added = 0
        for vote in votes:
            if not (vote.first_name and vote.last_name):
                continue
            if vote.legislator_id in self._fallback:
                continue
            self._fallback[vote.legislator_id] = LegislatorIdentity(
                legislator_id=vote.legislator_id,
                first_name=vote.first_name,
                last_name=vote.last_name,
                state=IdentityState.RESOLVED,
            )
            added += 1
        return added

    async def resolve(
        self,
        legislator_id: str,
        legislature: str,
        *,
        priority: Priority = Priority.NORMAL,
    ) -> LegislatorIdentity:
        """1名分の識別情報を解決する.

        鮮度内の解決済みエントリがあればI/Oなしで返す。
        取得中であれば進行中のタスクを待つ。例外は送出しない。
        """
        return await self._resolve(
            ensure_legislator_id_format(legislator_id),
            legislature,
            priority=priority,
            skip_store=False,
        )

    async def _resolve(
        self,
        key: str,
        legislature: str,
        *,
        priority: Priority,
        skip_store: bool,
    ) -> LegislatorIdentity:
        if not key:
            return LegislatorIdentity(legislator_id="", state=IdentityState.NOT_FOUND)

        if priority is Priority.VISIBLE:
            self._visible[key] = legislature

        entry = self._entries.get(key)
        if entry is not None and entry.is_fresh(
            self._scheduler.now(), self._config.freshness_window
        ):
            return entry

        task = self._in_flight.get(key)
        if task is None:
            task = self._start_attempt(key, legislature, skip_store=skip_store)

        # 呼び出し側がキャンセルされても取得処理は止めない
        return await asyncio.shield(task)

    def _start_attempt(
        self, key: str, legislature: str, *, skip_store: bool = False
    ) -> asyncio.Task[LegislatorIdentity]:
        current = self._entries.get(key) or LegislatorIdentity(legislator_id=key)
        self._entries[key] = current.loading()
        self._attempts[key] = self._attempts.get(key, 0) + 1

        task = asyncio.create_task(
            self._load(key, legislature, self._generation, skip_store=skip_store)
        )
        self._in_flight[key] = task
        task.add_done_callback(lambda done, k=key: self._forget_task(k, done))
        return task

    def _forget_task(self, key: str, task: asyncio.Task[LegislatorIdentity]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _load(
        self, key: str, legislature: str, generation: int, *, skip_store: bool
    ) -> LegislatorIdentity:
        identity = None
        if not skip_store:
            identity = await self._from_store(key, legislature)
        if identity is None:
            identity = self._fallback.get(key)
        if identity is None:
            identity = await self._from_remote(key, legislature)
        if identity is None:
            logger.info("議員 %s の氏名を解決できませんでした", key)
            identity = LegislatorIdentity(
                legislator_id=key, state=IdentityState.NOT_FOUND
            )
        return self._settle(key, identity, generation)

    async def _from_store(
        self, key: str, legislature: str
    ) -> LegislatorIdentity | None:
        try:
            async with self._repository_scope() as repository:
                legislator = await repository.get(key, legislature)
        except Exception as e:
            logger.warning("永続ストアからの議員取得に失敗: id=%s, error=%s", key, e)
            return None
        if legislator is None or not legislator.has_complete_name():
            return None
        return identity_from_legislator(legislator)

    async def _from_remote(
        self, key: str, legislature: str
    ) -> LegislatorIdentity | None:
        try:
            async with self._remote_slots:
                legislator = await self._open_data.fetch_legislator(key, legislature)
        except Exception as e:
            logger.warning("APIからの議員取得に失敗: id=%s, error=%s", key, e)
            return None
        if legislator is None or not legislator.has_complete_name():
            return None
        return identity_from_legislator(legislator)

    def _settle(
        self, key: str, identity: LegislatorIdentity, generation: int
    ) -> LegislatorIdentity:
        now = self._scheduler.now()
        current = self._entries.get(key)
        if (
            identity.state is IdentityState.NOT_FOUND
            and current is not None
            and current.first_name
            and current.last_name
        ):
            # 再取得に失敗しても既知の氏名は捨てない
            identity = replace(current, state=IdentityState.RESOLVED)
        settled = replace(identity, legislator_id=key, resolved_at=now)
        if generation == self._generation:
            self._entries[key] = settled
        return settled

    async def prefetch(
        self, legislator_ids: Iterable[str], legislature: str
    ) -> PrefetchResult:
        """複数IDをまとめて解決する.

        鮮度内のIDは飛ばし、残りは永続ストアへの1クエリで取得する。
        ストアに無く投票ペイロード由来の氏名も無いIDだけを個別に解決する。
        一括クエリ自体が失敗した場合、個別解決は永続ストアから試し直す。
        """
        keys = _canonical_keys(legislator_ids)
        now = self._scheduler.now()
        window = self._config.freshness_window
        fresh = [
            key
            for key in keys
            if key in self._entries and self._entries[key].is_fresh(now, window)
        ]
        fresh_keys = set(fresh)
        needed = [key for key in keys if key not in fresh_keys]
        if not needed:
            return PrefetchResult(requested=len(keys), already_fresh=len(fresh))

        rows: dict[str, Legislator] = {}
        batch_failed = False
        try:
            async with self._repository_scope() as repository:
                rows = await repository.get_many(needed, legislature)
        except Exception as e:
            batch_failed = True
            logger.warning(
                "永続ストアからの一括取得に失敗: count=%d, error=%s", len(needed), e
            )

        stored: set[str] = set()
        for legislator in rows.values():
            if not legislator.has_complete_name():
                continue
            identity = replace(identity_from_legislator(legislator), resolved_at=now)
            self._fallback[identity.legislator_id] = identity
            if identity.legislator_id not in self._in_flight:
                self._entries[identity.legislator_id] = identity
            stored.add(identity.legislator_id)

        from_fallback = 0
        for key in needed:
            if key in stored or key in self._in_flight:
                continue
            remembered = self._fallback.get(key)
            if remembered is not None:
                self._entries[key] = replace(remembered, resolved_at=now)
                from_fallback += 1

        missing = [key for key in needed if key not in self._fallback]
        if missing:
            logger.info(
                "永続ストアに無い議員 %d 名を個別に解決します", len(missing)
            )
            await asyncio.gather(
                *(
                    self._resolve(
                        key,
                        legislature,
                        priority=Priority.NORMAL,
                        skip_store=not batch_failed,
                    )
                    for key in missing
                )
            )

        logger.debug(
            "先読み完了: requested=%d, fresh=%d, store=%d, fallback=%d, individual=%d",
            len(keys),
            len(fresh),
            len(stored),
            from_fallback,
            len(missing),
        )
        return PrefetchResult(
            requested=len(keys),
            already_fresh=len(fresh),
            from_store=len(stored),
            from_fallback=from_fallback,
            resolved_individually=len(missing),
        )

    async def ensure_visible(
        self, legislator_ids: Iterable[str], legislature: str
    ) -> dict[str, LegislatorIdentity]:
        """表示中の議員を優先して解決する.

        retry_delay_seconds 経っても loading のままの議員は再取得する。
        全員が確定するか、試行回数が上限に達したら戻る。
        上限に達した議員は loading のまま返り、取得処理は裏で続く。
        """
        keys = _canonical_keys(legislator_ids)
        for key in keys:
            self._visible[key] = legislature

        lookups = [
            asyncio.ensure_future(
                self.resolve(key, legislature, priority=Priority.VISIBLE)
            )
            for key in keys
        ]
        watchdog: asyncio.Future[list[str]] | None = None
        try:
            while not self._all_settled(keys):
                loads = [self._in_flight[key] for key in keys if key in self._in_flight]
                waiting: set[asyncio.Future] = {
                    future for future in (*lookups, *loads) if not future.done()
                }
                if not waiting:
                    break
                if watchdog is None:
                    watchdog = asyncio.ensure_future(self.retry_stalled_visible(keys))
                done, _ = await asyncio.wait(
                    waiting | {watchdog}, return_when=asyncio.FIRST_COMPLETED
                )
                if watchdog in done:
                    retried = watchdog.result()
                    watchdog = None
                    if not retried:
                        break
        finally:
            if watchdog is not None:
                watchdog.cancel()
            for lookup in lookups:
                lookup.cancel()
        return {key: self.peek(key) for key in keys}

    def _all_settled(self, keys: list[str]) -> bool:
        return all(
            key in self._entries
            and self._entries[key].state
            in (IdentityState.RESOLVED, IdentityState.NOT_FOUND)
            for key in keys
        )

    async def retry_stalled_visible(
        self, legislator_ids: Iterable[str] | None = None
    ) -> list[str]:
        """一定時間待った後、まだ loading の表示中エントリを再取得する.

        legislator_ids を省略すると表示中の全エントリが対象。
        試行回数が上限に達したエントリは loading のまま残し、以後は再試行しない。

        Returns:
            再試行を開始した議員IDのリスト
        """
        await self._scheduler.sleep(self._config.retry_delay_seconds)

        candidates = (
            list(self._visible)
            if legislator_ids is None
            else [key for key in legislator_ids if key in self._visible]
        )
        stalled = [
            key
            for key in candidates
            if self._entries.get(key) is not None
            and self._entries[key].state is IdentityState.LOADING
        ]
        if not stalled:
            return []

        self._notify(f"{len(stalled)} 名の議員名の読み込みに時間がかかっています")

        retried: list[str] = []
        for key in stalled:
            if self._attempts.get(key, 0) >= self._config.max_attempts:
                logger.debug("議員 %s は試行上限に達したため再試行しません", key)
                continue
            self._start_attempt(key, self._visible[key])
            retried.append(key)
        return retried

    def named_vote(self, vote: LegislatorVote) -> LegislatorVote:
        """キャッシュ上の氏名を投票に反映する.

        解決済みの氏名 → ペイロードの氏名 → プレースホルダ名の順に使う。
        """
        identity = self.peek(vote.legislator_id)
        if identity.state is IdentityState.RESOLVED and identity.full_name:
            return vote.with_identity(identity.first_name, identity.last_name)
        if vote.first_name and vote.last_name:
            return vote
        return vote.with_identity("", self.placeholder_name(vote.legislator_id))

    async def drain(self) -> None:
        """進行中の取得タスクが全て終わるまで待つ."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight.values()))

    def invalidate(self) -> None:
        """全エントリを破棄する。強制同期の後に使う."""
        self._generation += 1
        self._entries.clear()
        self._fallback.clear()
        self._attempts.clear()
        self._visible.clear()
        logger.info("議員識別情報キャッシュをクリアしました")
