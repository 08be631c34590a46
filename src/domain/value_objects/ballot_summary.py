"""スクルタン（記名投票）1件の要約を表す Value Object."""

from dataclasses import dataclass, field

from src.domain.value_objects.vote_counts import VoteCounts


@dataclass(frozen=True)
class BallotSummary:
    """スクルタンの要約.

    詳細取得1回につき1度だけ構築され、以後は不変。
    """

    number: str
    legislature: str
    date: str = ""
    title: str = ""
    description: str = ""
    counts: VoteCounts = field(default_factory=VoteCounts)

    @property
    def assemblee_url(self) -> str:
        """国民議会サイト上のスクルタンページURL."""
        return (
            "https://www.assemblee-nationale.fr/dyn/"
            f"{self.legislature}/scrutins/{self.number}"
        )
