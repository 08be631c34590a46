"""会派内の議員1名の投票を表す Value Object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from src.domain.value_objects.vote_position import VotePosition


# causePosition の既知コード
CAUSE_LABELS: dict[str, str] = {
    "PAN": "Président",
    "PSE": "Séance",
}


@dataclass(frozen=True)
class LegislatorVote:
    """議員の投票レコード.

    legislator_id は常に正規化済み（PA + 数字）。
    氏名は名前解決が終わるまで空文字のことがある。
    """

    legislator_id: str
    position: VotePosition
    first_name: str = ""
    last_name: str = ""
    delegation: bool = False
    cause: str | None = None

    @property
    def display_name(self) -> str:
        """表示名。氏名未解決の場合はIDを返す."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.legislator_id

    @property
    def cause_label(self) -> str | None:
        if self.cause is None:
            return None
        return CAUSE_LABELS.get(self.cause, self.cause)

    def with_identity(self, first_name: str, last_name: str) -> LegislatorVote:
        """氏名を埋めた新しいインスタンスを返す."""
        return replace(self, first_name=first_name, last_name=last_name)
