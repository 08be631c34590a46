"""Legislator repository implementation using SQLAlchemy."""

import logging

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.legislator import Legislator
from src.domain.repositories.legislator_repository import LegislatorRepository
from src.domain.utils.legislator_id import ensure_legislator_id_format
from src.infrastructure.exceptions import DatabaseError, UpdateError
from src.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    row_to_dict,
)


logger = logging.getLogger(__name__)

_COLUMNS = (
    "id",
    "legislator_id",
    "first_name",
    "last_name",
    "full_name",
    "legislature",
    "political_group",
    "political_group_id",
    "profession",
    "created_at",
    "updated_at",
)

_UPSERT_SQL = """
    INSERT INTO legislators (
        legislator_id, first_name, last_name, full_name, legislature,
        political_group, political_group_id, profession, created_at, updated_at
    ) VALUES (
        :legislator_id, :first_name, :last_name, :full_name, :legislature,
        :political_group, :political_group_id, :profession, :now, :now
    )
    ON CONFLICT (legislator_id, legislature) DO UPDATE SET
        first_name = EXCLUDED.first_name,
        last_name = EXCLUDED.last_name,
        full_name = EXCLUDED.full_name,
        political_group = EXCLUDED.political_group,
        political_group_id = EXCLUDED.political_group_id,
        profession = EXCLUDED.profession,
        updated_at = EXCLUDED.updated_at
"""


class LegislatorModel(PydanticBaseModel):
    """Legislator database model."""

    id: int | None = None
    legislator_id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    legislature: str
    political_group: str | None = None
    political_group_id: str | None = None
    profession: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LegislatorRepositoryImpl(BaseRepositoryImpl[Legislator], LegislatorRepository):
    """Legislator repository implementation using SQLAlchemy."""

    table_name = "legislators"
    columns = _COLUMNS

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(session)

    async def get(self, legislator_id: str, legislature: str) -> Legislator | None:
        """議員IDと立法期で1件取得.

        Args:
            legislator_id: 議員ID（未正規化でもよい）
            legislature: 立法期

        Returns:
            議員エンティティ、見つからない場合はNone
        """
        canonical = ensure_legislator_id_format(legislator_id)
        try:
            query = text(f"""
                SELECT {self._select_columns}
                FROM legislators
                WHERE legislator_id = :legislator_id
                AND legislature = :legislature
            """)
            result = await self.session.execute(
                query, {"legislator_id": canonical, "legislature": legislature}
            )
            row = result.fetchone()
            return self._dict_to_entity(row_to_dict(row)) if row else None

        except SQLAlchemyError as e:
            logger.error(f"Database error getting legislator: {e}")
            raise DatabaseError(
                "Failed to get legislator",
                {
                    "legislator_id": canonical,
                    "legislature": legislature,
                    "error": str(e),
                },
            ) from e

    async def get_many(
        self, legislator_ids: Iterable[str], legislature: str
    ) -> dict[str, Legislator]:
        """複数の議員を1クエリで取得.

        Returns:
            議員ID → 議員エンティティ
        """
        canonical_ids = sorted(
            {
                canonical
                for canonical in map(ensure_legislator_id_format, legislator_ids)
                if canonical
            }
        )
        if not canonical_ids:
            return {}
        try:
            query = text(f"""
                SELECT {self._select_columns}
                FROM legislators
                WHERE legislature = :legislature
                AND legislator_id IN :legislator_ids
            """).bindparams(bindparam("legislator_ids", expanding=True))
            result = await self.session.execute(
                query, {"legislature": legislature, "legislator_ids": canonical_ids}
            )
            legislators = [
                self._dict_to_entity(row_to_dict(row)) for row in result.fetchall()
            ]
            return {legislator.legislator_id: legislator for legislator in legislators}

        except SQLAlchemyError as e:
            logger.error(f"Database error getting legislators: {e}")
            raise DatabaseError(
                "Failed to get legislators",
                {
                    "count": len(canonical_ids),
                    "legislature": legislature,
                    "error": str(e),
                },
            ) from e

    async def upsert_many(self, legislators: list[Legislator]) -> int:
        """(legislator_id, legislature) を衝突キーとして一括upsert.

        Returns:
            書き込んだ行数
        """
        if not legislators:
            return 0
        now = datetime.now()
        params = [self._to_params(legislator, now) for legislator in legislators]
        try:
            await self.session.execute(text(_UPSERT_SQL), params)
            await self.session.commit()
            return len(params)

        except SQLAlchemyError as e:
            logger.error(f"Database error upserting legislators: {e}")
            await self.session.rollback()
            raise UpdateError(
                "Failed to upsert legislators",
                {
                    "legislator_ids": [p["legislator_id"] for p in params],
                    "error": str(e),
                },
            ) from e

    async def delete_by_legislature(self, legislature: str) -> int:
        """立法期の行を全て削除し、削除件数を返す."""
        try:
            result = await self.session.execute(
                text("DELETE FROM legislators WHERE legislature = :legislature"),
                {"legislature": legislature},
            )
            await self.session.commit()
            return result.rowcount or 0  # type: ignore[attr-defined]

        except SQLAlchemyError as e:
            logger.error(f"Database error deleting legislators: {e}")
            await self.session.rollback()
            raise UpdateError(
                "Failed to delete legislators",
                {"legislature": legislature, "error": str(e)},
            ) from e

    async def count_by_legislature(self, legislature: str) -> int:
        """立法期の行数を返す."""
        try:
            result = await self.session.execute(
                text(
                    "SELECT COUNT(*) FROM legislators WHERE legislature = :legislature"
                ),
                {"legislature": legislature},
            )
            count = result.scalar()
            return count if count is not None else 0

        except SQLAlchemyError as e:
            logger.error(f"Database error counting legislators: {e}")
            raise DatabaseError(
                "Failed to count legislators",
                {"legislature": legislature, "error": str(e)},
            ) from e

    @staticmethod
    def _to_params(legislator: Legislator, now: datetime) -> dict[str, Any]:
        return {
            "legislator_id": ensure_legislator_id_format(legislator.legislator_id),
            "first_name": legislator.first_name or "",
            "last_name": legislator.last_name or "",
            "full_name": legislator.full_name,
            "legislature": legislator.legislature,
            "political_group": legislator.political_group or None,
            "political_group_id": legislator.political_group_id or None,
            "profession": legislator.profession or None,
            "now": now,
        }

    def _dict_to_entity(self, data: dict[str, Any]) -> Legislator:
        """Convert dictionary to entity."""
        model = LegislatorModel.model_validate(data)
        legislator = Legislator(
            legislator_id=model.legislator_id,
            first_name=model.first_name or "",
            last_name=model.last_name or "",
            legislature=model.legislature,
            political_group=model.political_group,
            political_group_id=model.political_group_id,
            profession=model.profession,
            id=model.id,
        )
        legislator.created_at = model.created_at
        legislator.updated_at = model.updated_at
        return legislator
