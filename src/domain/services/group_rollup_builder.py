"""会派別ロールアップ構築サービス.

スクルタンのペイロードから「会派ID → GroupVoteDetail」のマップを作る。
会派コレクションが配列でもIDキーのマップでも同じ結果になる。
"""

from __future__ import annotations

import logging

from collections.abc import Mapping
from typing import Any

from src.domain.services.position_normalizer import PositionNormalizer
from src.domain.utils.payload import (
    as_list,
    first_present,
    get_path,
    text_value,
    to_int,
)
from src.domain.value_objects.group_vote_detail import GroupVoteDetail
from src.domain.value_objects.vote_counts import PositionCounts


logger = logging.getLogger(__name__)

GROUP_NAME_FALLBACK_PREFIX = "Group"

# (単数キー, 複数キー) の組。APIによってどちらも使われる
_BUCKET_KEYS: dict[str, tuple[str, str]] = {
    "for_": ("pour", "pours"),
    "against": ("contre", "contres"),
    "abstain": ("abstention", "abstentions"),
    "absent": ("nonVotant", "nonVotants"),
}


def _voter_count(bucket: Any) -> int:
    """人数 (数値) または {votant: ...} のどちらでも人数を返す."""
    if isinstance(bucket, Mapping):
        voters = bucket.get("votant")
        return len(as_list(voters)) if voters else 0
    if isinstance(bucket, list):
        return len(bucket)
    return to_int(bucket)


def _bucket(container: Mapping[str, Any], name: str) -> Any:
    singular, plural = _BUCKET_KEYS[name]
    value = container.get(plural)
    if value is None:
        value = container.get(singular)
    return value


def _counts_from_container(container: Mapping[str, Any]) -> PositionCounts:
    return PositionCounts(
        **{name: _voter_count(_bucket(container, name)) for name in _BUCKET_KEYS}
    )


class GroupRollupBuilder:
    """スクルタンペイロードから会派別の集計を作る."""

    @staticmethod
    def find_group_entries(payload: Any) -> list[tuple[str, Mapping[str, Any]]]:
        """会派エントリを (会派ID, 生データ) の列として返す.

        対応形式:
        - groupes: 配列（各要素に organeRef / uid）
        - groupes: 会派IDをキーとするマップ
        - scrutin.ventilationVotes.organe.groupes.groupe
        - scrutin.ventilationVotes.organe（配列 or 単体）
        - scrutin.groupes.groupe
        """
        if not isinstance(payload, Mapping):
            return []

        groups = payload.get("groupes")
        if isinstance(groups, Mapping):
            return [
                (str(key), value)
                for key, value in groups.items()
                if isinstance(value, Mapping) and str(key)
            ]
        if isinstance(groups, list):
            return GroupRollupBuilder._keyed(groups)

        scrutin = payload.get("scrutin")
        organe = get_path(scrutin, "ventilationVotes", "organe")
        nested = get_path(organe, "groupes", "groupe")
        if nested:
            return GroupRollupBuilder._keyed(as_list(nested))
        if organe:
            return GroupRollupBuilder._keyed(as_list(organe))

        legacy = get_path(scrutin, "groupes", "groupe")
        if legacy:
            return GroupRollupBuilder._keyed(as_list(legacy))

        return []

    @staticmethod
    def _keyed(entries: list[Any]) -> list[tuple[str, Mapping[str, Any]]]:
        keyed: list[tuple[str, Mapping[str, Any]]] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            group_id = GroupRollupBuilder.group_id_of(entry)
            if not group_id:
                logger.debug("会派IDのないエントリをスキップ: keys=%s", list(entry))
                continue
            keyed.append((group_id, entry))
        return keyed

    @staticmethod
    def group_id_of(entry: Mapping[str, Any]) -> str:
        """organeRef（文字列 or #textノード）→ uid の順で会派IDを取り出す."""
        return text_value(entry.get("organeRef")) or text_value(entry.get("uid"))

    @staticmethod
    def group_name_of(entry: Mapping[str, Any], group_id: str) -> str:
        """会派名を解決する。空文字は返さない."""
        name = text_value(
            first_present(entry, "libelle", "nom", "nomComplet", "nomCourt")
        )
        return name or f"{GROUP_NAME_FALLBACK_PREFIX} {group_id}"

    @staticmethod
    def position_counts_of(entry: Mapping[str, Any]) -> PositionCounts:
        """会派エントリのポジション別人数.

        votes（名簿） → decompte（数値 or 名簿） → vote.decompteVoix
        → vote.decompteNominatif → フラットな数値フィールドの順に試す。
        """
        votes = entry.get("votes")
        if isinstance(votes, Mapping):
            return _counts_from_container(votes)

        decompte = entry.get("decompte")
        if isinstance(decompte, Mapping):
            return _counts_from_container(decompte)

        vote = entry.get("vote")
        if isinstance(vote, Mapping):
            for key in ("decompteVoix", "decompteNominatif"):
                block = vote.get(key)
                if isinstance(block, Mapping):
                    return _counts_from_container(block)

        return PositionCounts(
            for_=to_int(first_present(entry, "nombrePour", "nbPour")),
            against=to_int(first_present(entry, "nombreContre", "nbContre")),
            abstain=to_int(first_present(entry, "nombreAbstention", "nbAbstention")),
            absent=to_int(first_present(entry, "nombreNonVotant", "nbNonVotant")),
        )

    @staticmethod
    def build_group(group_id: str, entry: Mapping[str, Any]) -> GroupVoteDetail:
        """1会派分の GroupVoteDetail を構築する（議員別内訳は含まない）."""
        majority = (
            entry.get("positionMajoritaire")
            or entry.get("position_majoritaire")
            or get_path(entry, "vote", "positionMajoritaire")
        )
        return GroupVoteDetail(
            group_id=group_id,
            name=GroupRollupBuilder.group_name_of(entry, group_id),
            majority_position=PositionNormalizer.normalize(majority),
            counts=GroupRollupBuilder.position_counts_of(entry),
        )

    @staticmethod
    def build(payload: Any) -> dict[str, GroupVoteDetail]:
        """会派ID → GroupVoteDetail のマップを返す。該当なしは空マップ."""
        entries = GroupRollupBuilder.find_group_entries(payload)
        if not entries:
            logger.debug("会派コレクションが見つかりません")
            return {}
        return {
            group_id: GroupRollupBuilder.build_group(group_id, entry)
            for group_id, entry in entries
        }


def build_group_rollup(payload: Any) -> dict[str, GroupVoteDetail]:
    """GroupRollupBuilder.build のショートカット."""
    return GroupRollupBuilder.build(payload)
