"""投票ポジション正規化サービス.

APIごとに表記揺れのある投票ポジション文字列を VotePosition の4値に揃える。
"""

from typing import Any

from src.domain.value_objects.vote_position import VotePosition


# 部分一致の優先順（先にマッチしたものを採用）
_SUBSTRING_RULES: tuple[tuple[str, VotePosition], ...] = (
    ("pour", VotePosition.FOR),
    ("contre", VotePosition.AGAINST),
    ("abstention", VotePosition.ABSTAIN),
    ("non-votant", VotePosition.ABSENT),
    ("nonvotant", VotePosition.ABSENT),
    ("absent", VotePosition.ABSENT),
)

# 英語表記は部分一致だと誤検出しやすいので完全一致のみ
_EXACT_ALIASES: dict[str, VotePosition] = {
    "for": VotePosition.FOR,
    "yes": VotePosition.FOR,
    "against": VotePosition.AGAINST,
    "no": VotePosition.AGAINST,
    "abstain": VotePosition.ABSTAIN,
}


class PositionNormalizer:
    """投票ポジション文字列の正規化."""

    @staticmethod
    def normalize(value: Any) -> VotePosition:
        """任意の文字列を VotePosition に変換する.

        小文字化・トリム後、pour → contre → abstention → (non-votant|absent)
        の順で部分一致を試す。空・None・未知の値は ABSENT。例外は投げない。
        """
        if isinstance(value, VotePosition):
            return value
        if not isinstance(value, str):
            return VotePosition.ABSENT

        normalized = value.lower().strip()
        if not normalized:
            return VotePosition.ABSENT

        for token, position in _SUBSTRING_RULES:
            if token in normalized:
                return position

        return _EXACT_ALIASES.get(normalized, VotePosition.ABSENT)


def normalize_position(value: Any) -> VotePosition:
    """PositionNormalizer.normalize のショートカット."""
    return PositionNormalizer.normalize(value)
