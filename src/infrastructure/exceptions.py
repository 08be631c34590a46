"""Infrastructure layer exceptions."""

from typing import Any


class InfrastructureError(Exception):
    """インフラ層エラーの基底クラス.

    details には調査用の付帯情報（対象ID、元エラーメッセージなど）を入れる。
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} ({self.details})"


class DatabaseError(InfrastructureError):
    """データベース操作の失敗."""


class UpdateError(DatabaseError):
    """書き込み（upsert / delete）の失敗."""


class ExternalServiceError(InfrastructureError):
    """外部APIの失敗."""

    def __init__(
        self,
        service_name: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(f"{service_name}: {message}", details)
        self.service_name = service_name
