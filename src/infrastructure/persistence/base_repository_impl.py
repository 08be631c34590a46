"""Base repository implementation for infrastructure layer."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.base import BaseEntity


def row_to_dict(row: Any) -> dict[str, Any]:
    """text() SQL の結果行を dict に変換する."""
    if hasattr(row, "_asdict"):
        return row._asdict()  # type: ignore[attr-defined]
    if hasattr(row, "_mapping"):
        return dict(row._mapping)  # type: ignore[attr-defined]
    return dict(row)


class BaseRepositoryImpl[T: BaseEntity]:
    """Base repository implementation using raw SQL over an AsyncSession.

    Subclasses provide the table name, the selected column list and
    ``_dict_to_entity()``.

    Type Parameters:
        T: Domain entity type that extends BaseEntity
    """

    table_name: str = ""
    columns: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def _select_columns(self) -> str:
        return ", ".join(self.columns) if self.columns else "*"

    def _dict_to_entity(self, data: dict[str, Any]) -> T:
        """Convert a result row dict to a domain entity."""
        raise NotImplementedError("Subclass must implement _dict_to_entity")
