"""会派詳細ペイロードから議員別の投票を抽出するサービス."""

from __future__ import annotations

import logging

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.domain.utils.legislator_id import ensure_legislator_id_format
from src.domain.utils.payload import TEXT_NODE_KEY, as_list, text_value
from src.domain.value_objects.legislator_vote import LegislatorVote
from src.domain.value_objects.vote_position import VotePosition


logger = logging.getLogger(__name__)

# (ポジション, 試すキー) の順序がそのまま出力順になる
_BUCKETS: tuple[tuple[VotePosition, tuple[str, ...]], ...] = (
    (VotePosition.FOR, ("pours", "pour")),
    (VotePosition.AGAINST, ("contres", "contre")),
    (VotePosition.ABSTAIN, ("abstentions", "abstention")),
    (VotePosition.ABSENT, ("nonVotants", "nonVotant")),
)

_CONTAINER_KEYS = ("decompte", "votes")


@dataclass(frozen=True)
class LegislatorVoteExtraction:
    """抽出結果.

    dropped_count はIDを解決できずに捨てた投票者の数。
    """

    votes: tuple[LegislatorVote, ...] = ()
    dropped_count: int = 0


def _is_voter_bucket(value: Any) -> bool:
    """名簿の形をしたバケットか。数値や文字列の人数は名簿ではない."""
    if isinstance(value, Mapping):
        return "votant" in value or "acteurRef" in value or "id" in value
    return isinstance(value, list)


def _bucket_of(container: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = container.get(key)
        if value and _is_voter_bucket(value):
            return value
    return None


def _has_bucket_data(container: Any) -> bool:
    if not isinstance(container, Mapping):
        return False
    return any(_voters_of(_bucket_of(container, keys)) for _, keys in _BUCKETS)


def _voters_of(bucket: Any) -> list[Any]:
    """バケットから投票者エントリのリストを取り出す.

    {votant: [...]}, {votant: {...}}, 単独の投票者, 投票者の配列に対応する。
    人数だけのスカラー値は空リストになる。
    """
    if isinstance(bucket, Mapping):
        if "votant" in bucket:
            return as_list(bucket.get("votant"))
        return [bucket]
    if isinstance(bucket, list):
        return [voter for voter in bucket if isinstance(voter, (Mapping, str))]
    return []


def _voter_id(voter: Any) -> str:
    """acteurRef の #text → acteurRef 文字列 → id の順に議員IDを解決する."""
    if isinstance(voter, str):
        return voter.strip()
    if not isinstance(voter, Mapping):
        return ""
    ref = voter.get("acteurRef")
    if isinstance(ref, Mapping):
        candidate = text_value(ref.get(TEXT_NODE_KEY))
        if candidate:
            return candidate
    elif isinstance(ref, str) and ref.strip():
        return ref.strip()
    return text_value(voter.get("id"))


def _is_delegation(value: Any) -> bool:
    return value is True or value == "true"


def _sort_key(vote: LegislatorVote) -> str:
    return (vote.last_name or vote.legislator_id).lower()


class LegislatorVoteExtractor:
    """会派詳細ペイロード → LegislatorVote 列."""

    @staticmethod
    def find_container(group_detail: Any) -> Mapping[str, Any] | None:
        """decompte → votes → 会派ルートの順に、バケットを持つ最初の入れ物を返す."""
        if not isinstance(group_detail, Mapping):
            return None
        for key in _CONTAINER_KEYS:
            candidate = group_detail.get(key)
            if _has_bucket_data(candidate):
                return candidate
        if _has_bucket_data(group_detail):
            return group_detail
        return None

    @staticmethod
    def extract(
        group_detail: Any, *, sort_by_name: bool = True
    ) -> LegislatorVoteExtraction:
        """議員別投票を抽出する.

        IDを解決できない投票者は捨て、その数を dropped_count に数える。
        sort_by_name=False の場合はバケット順（賛成・反対・棄権・不参加）のまま。
        """
        container = LegislatorVoteExtractor.find_container(group_detail)
        if container is None:
            logger.debug("議員別投票データが見つかりません")
            return LegislatorVoteExtraction()

        votes: list[LegislatorVote] = []
        dropped = 0
        for position, keys in _BUCKETS:
            for voter in _voters_of(_bucket_of(container, keys)):
                raw_id = _voter_id(voter)
                if not raw_id:
                    dropped += 1
                    continue
                attributes = voter if isinstance(voter, Mapping) else {}
                cause = text_value(attributes.get("causePosition")) or None
                votes.append(
                    LegislatorVote(
                        legislator_id=ensure_legislator_id_format(raw_id),
                        position=position,
                        first_name=text_value(attributes.get("prenom")),
                        last_name=text_value(attributes.get("nom")),
                        delegation=_is_delegation(attributes.get("parDelegation")),
                        cause=cause,
                    )
                )

        if dropped:
            logger.warning("IDを解決できない投票者を %d 件スキップしました", dropped)

        if sort_by_name:
            votes.sort(key=_sort_key)

        return LegislatorVoteExtraction(votes=tuple(votes), dropped_count=dropped)


def extract_legislator_votes(
    group_detail: Any, *, sort_by_name: bool = True
) -> LegislatorVoteExtraction:
    """LegislatorVoteExtractor.extract のショートカット."""
    return LegislatorVoteExtractor.extract(group_detail, sort_by_name=sort_by_name)
