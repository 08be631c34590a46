"""投票ポジションの Value Object."""

from enum import Enum


class VotePosition(Enum):
    """正規化済みの投票ポジション.

    APIのどの表記（大文字小文字違い、複数形、仏語ラベル）も
    必ずこの4値のいずれかに正規化される。
    """

    FOR = "pour"
    AGAINST = "contre"
    ABSTAIN = "abstention"
    ABSENT = "absent"

    @property
    def label(self) -> str:
        """表示用ラベル（先頭大文字の仏語）."""
        return _LABELS[self]


_LABELS: dict[VotePosition, str] = {
    VotePosition.FOR: "Pour",
    VotePosition.AGAINST: "Contre",
    VotePosition.ABSTAIN: "Abstention",
    VotePosition.ABSENT: "Absent",
}
