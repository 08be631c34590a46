"""スクルタン全体の投票数抽出サービス.

上流APIは少なくとも6種類の互換性のないレスポンス形式を返してきた。
抽出戦略を優先順に試し、最初に非ゼロの結果を返した戦略を採用する。
"""

from __future__ import annotations

import logging

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from src.domain.utils.payload import as_list, get_path, to_int
from src.domain.value_objects.vote_counts import VoteCounts


logger = logging.getLogger(__name__)

NO_STRATEGY = "none"


@dataclass(frozen=True)
class VoteCountExtraction:
    """抽出結果と、採用された戦略名."""

    counts: VoteCounts
    strategy: str = NO_STRATEGY

    @property
    def matched(self) -> bool:
        return self.strategy != NO_STRATEGY


def _count_voters(bucket: Any) -> int:
    """{votant: [...]} または {votant: {...}} の人数を数える."""
    if not isinstance(bucket, Mapping):
        return 0
    voters = bucket.get("votant")
    if not voters:
        return 0
    return len(as_list(voters))


def _group_collection(payload: Mapping[str, Any]) -> list[Any]:
    groups = payload.get("groupes")
    if isinstance(groups, Mapping):
        return list(groups.values())
    return as_list(groups)


def _from_counts(voters: int, for_: int, against: int, abstain: int) -> VoteCounts:
    # votants が内訳合計より小さい集計ブロックがあるため合計で補正する
    expressed = for_ + against + abstain
    return VoteCounts(
        voters=max(voters, expressed),
        for_=for_,
        against=against,
        abstain=abstain,
    )


def _from_group_vote_lists(payload: Mapping[str, Any]) -> VoteCounts | None:
    groups = _group_collection(payload)
    if not groups:
        return None
    for_ = against = abstain = 0
    for group in groups:
        votes = get_path(group, "votes")
        if not isinstance(votes, Mapping):
            continue
        for_ += _count_voters(votes.get("pours"))
        against += _count_voters(votes.get("contres"))
        abstain += _count_voters(votes.get("abstentions"))
    return _from_counts(0, for_, against, abstain)


def _from_synthese_vote(payload: Mapping[str, Any]) -> VoteCounts | None:
    synthese = payload.get("syntheseVote")
    if not isinstance(synthese, Mapping):
        return None
    return _from_counts(
        to_int(synthese.get("nombreVotants")),
        to_int(get_path(synthese, "decompte", "pour")),
        to_int(get_path(synthese, "decompte", "contre")),
        to_int(get_path(synthese, "decompte", "abstentions")),
    )


def _from_flat_fields(payload: Mapping[str, Any]) -> VoteCounts | None:
    if "nombreVotants" not in payload:
        return None
    return _from_counts(
        to_int(payload.get("nombreVotants")),
        to_int(payload.get("nombrePour")),
        to_int(payload.get("nombreContre")),
        to_int(payload.get("nombreAbstentions")),
    )


def _from_mise_au_point(payload: Mapping[str, Any]) -> VoteCounts | None:
    block = payload.get("miseAuPoint")
    if not isinstance(block, Mapping):
        return None
    return _from_counts(
        to_int(block.get("nombreVotants")),
        to_int(block.get("pour")),
        to_int(block.get("contre")),
        to_int(block.get("abstentions")),
    )


def _from_decompte_voix(payload: Mapping[str, Any]) -> VoteCounts | None:
    scrutin = payload.get("scrutin")
    decompte = get_path(scrutin, "decompteVoix")
    if not isinstance(decompte, Mapping):
        return None
    return _from_counts(
        to_int(get_path(scrutin, "nombreVotants")),
        to_int(decompte.get("pour")),
        to_int(decompte.get("contre")),
        to_int(decompte.get("abstentions")),
    )


def _from_decompte_nominatif(payload: Mapping[str, Any]) -> VoteCounts | None:
    decompte = get_path(payload, "scrutin", "decompteNominatif")
    if not isinstance(decompte, Mapping):
        return None
    for_ = _count_voters(decompte.get("pour") or decompte.get("pours"))
    against = _count_voters(decompte.get("contre") or decompte.get("contres"))
    abstain = _count_voters(
        decompte.get("abstentions") or decompte.get("abstention")
    )
    # 名簿の人数から数えるため votants は常に内訳の合計
    return VoteCounts(
        voters=for_ + against + abstain,
        for_=for_,
        against=against,
        abstain=abstain,
    )


def _from_group_numeric_votes(payload: Mapping[str, Any]) -> VoteCounts | None:
    groups = _group_collection(payload)
    if not groups:
        return None
    for_ = against = abstain = 0
    for group in groups:
        vote = get_path(group, "vote")
        if not isinstance(vote, Mapping):
            continue
        for_ += to_int(vote.get("pour"))
        against += to_int(vote.get("contre"))
        abstain += to_int(vote.get("abstention"))
    return _from_counts(0, for_, against, abstain)


_Strategy = Callable[[Mapping[str, Any]], VoteCounts | None]

# 優先順
STRATEGIES: tuple[tuple[str, _Strategy], ...] = (
    ("group_vote_lists", _from_group_vote_lists),
    ("synthese_vote", _from_synthese_vote),
    ("flat_fields", _from_flat_fields),
    ("mise_au_point", _from_mise_au_point),
    ("decompte_voix", _from_decompte_voix),
    ("decompte_nominatif", _from_decompte_nominatif),
    ("group_numeric_votes", _from_group_numeric_votes),
)


class VoteCountExtractor:
    """任意形式のスクルタンペイロードから集計値を抽出する."""

    @staticmethod
    def extract_with_strategy(payload: Any) -> VoteCountExtraction:
        """集計値と採用戦略を返す。どの形式にも合わなければ全て0."""
        if not isinstance(payload, Mapping):
            logger.debug("集計抽出: Mapping以外のペイロード (%s)", type(payload))
            return VoteCountExtraction(VoteCounts())

        for name, strategy in STRATEGIES:
            counts = strategy(payload)
            if counts is not None and not counts.is_empty:
                logger.debug("集計抽出: 戦略 %s を採用 %s", name, counts)
                return VoteCountExtraction(counts, name)

        logger.debug("集計抽出: 既知の形式に一致しません (keys=%s)", list(payload))
        return VoteCountExtraction(VoteCounts())

    @staticmethod
    def extract(payload: Any) -> VoteCounts:
        """集計値のみを返す."""
        return VoteCountExtractor.extract_with_strategy(payload).counts


def extract_vote_counts(payload: Any) -> VoteCounts:
    """VoteCountExtractor.extract のショートカット."""
    return VoteCountExtractor.extract(payload)
