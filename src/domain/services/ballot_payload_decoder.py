"""スクルタン詳細ペイロードのデコーダー.

APIごとに異なるレスポンス形式の判定はここで一度だけ行い、
以降の処理には BallotSummary と会派マップだけを渡す。
"""

from __future__ import annotations

import logging

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from src.domain.services.group_rollup_builder import GroupRollupBuilder
from src.domain.services.vote_count_extractor import NO_STRATEGY, VoteCountExtractor
from src.domain.utils.payload import first_present, get_path, text_value
from src.domain.value_objects.ballot_summary import BallotSummary
from src.domain.value_objects.group_vote_detail import GroupVoteDetail


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedBallot:
    """デコード済みスクルタン."""

    summary: BallotSummary
    groups: dict[str, GroupVoteDetail] = field(default_factory=dict)
    count_strategy: str = NO_STRATEGY


def _metadata_source(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    scrutin = payload.get("scrutin")
    if isinstance(scrutin, Mapping):
        return scrutin
    return payload


class BallotPayloadDecoder:
    """スクルタン詳細ペイロード → DecodedBallot."""

    @staticmethod
    def decode(payload: Any, *, number: str, legislature: str) -> DecodedBallot:
        """ペイロードをデコードする。形式が想定外でも例外は投げない."""
        if not isinstance(payload, Mapping):
            logger.warning("スクルタンペイロードが辞書ではありません: type=%s", type(payload))
            return DecodedBallot(
                summary=BallotSummary(number=number, legislature=legislature)
            )

        source = _metadata_source(payload)
        extraction = VoteCountExtractor.extract_with_strategy(payload)
        summary = BallotSummary(
            number=(
                text_value(first_present(source, "numero", "scrutin_numero")) or number
            ),
            legislature=text_value(source.get("legislature")) or legislature,
            date=text_value(first_present(source, "dateScrutin", "date")),
            title=text_value(source.get("titre"))
            or text_value(get_path(source, "objet", "libelle")),
            description=text_value(source.get("description"))
            or text_value(get_path(source, "sort", "libelle")),
            counts=extraction.counts,
        )
        groups = GroupRollupBuilder.build(payload)
        logger.debug(
            "スクルタン %s をデコードしました: strategy=%s, groups=%d",
            summary.number,
            extraction.strategy,
            len(groups),
        )
        return DecodedBallot(
            summary=summary, groups=groups, count_strategy=extraction.strategy
        )


def decode_ballot_payload(
    payload: Any, *, number: str, legislature: str
) -> DecodedBallot:
    """BallotPayloadDecoder.decode のショートカット."""
    return BallotPayloadDecoder.decode(payload, number=number, legislature=legislature)
