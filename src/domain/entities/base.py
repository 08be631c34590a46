"""Base entity for domain layer."""

from datetime import datetime


class BaseEntity:
    """ドメインエンティティの基底クラス.

    永続化IDと監査用タイムスタンプのみを保持する。
    """

    def __init__(self, id: int | None = None) -> None:
        self.id = id
        self.created_at: datetime | None = None
        self.updated_at: datetime | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))
