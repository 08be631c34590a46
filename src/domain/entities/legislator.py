"""Legislator entity."""

from src.domain.entities.base import BaseEntity


class Legislator(BaseEntity):
    """議員（député）を表すエンティティ.

    永続ストアの legislators テーブル1行に対応する。
    (legislator_id, legislature) の組で一意。
    """

    def __init__(
        self,
        legislator_id: str,
        first_name: str,
        last_name: str,
        legislature: str,
        political_group: str | None = None,
        political_group_id: str | None = None,
        profession: str | None = None,
        id: int | None = None,
    ) -> None:
        super().__init__(id)
        self.legislator_id = legislator_id
        self.first_name = first_name
        self.last_name = last_name
        self.legislature = legislature
        self.political_group = political_group
        self.political_group_id = political_group_id
        self.profession = profession

    @property
    def full_name(self) -> str:
        """「名 姓」形式の表示名."""
        return f"{self.first_name} {self.last_name}".strip()

    def has_complete_name(self) -> bool:
        """姓名が両方とも揃っているかどうかを返す."""
        return bool(self.first_name and self.last_name)

    def natural_key(self) -> tuple[str, str]:
        """upsert の衝突キー (legislator_id, legislature)."""
        return (self.legislator_id, self.legislature)

    def __str__(self) -> str:
        return f"{self.full_name} ({self.legislator_id})"
