"""Legislator repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from contextlib import AbstractAsyncContextManager

from src.domain.entities.legislator import Legislator


class LegislatorRepository(ABC):
    """Repository interface for the mirrored legislator roster.

    Rows are unique per (legislator_id, legislature); every identifier
    passed in is expected to be in canonical ``PA<digits>`` form.
    """

    @abstractmethod
    async def get(self, legislator_id: str, legislature: str) -> Legislator | None:
        """議員IDと立法期で1件取得.

        Args:
            legislator_id: 正規化済み議員ID
            legislature: 立法期（例: "17"）

        Returns:
            議員エンティティ、見つからない場合はNone
        """
        pass

    @abstractmethod
    async def get_many(
        self, legislator_ids: Iterable[str], legislature: str
    ) -> dict[str, Legislator]:
        """複数の議員を1クエリで取得.

        Returns:
            議員ID → 議員エンティティ。見つからないIDはキーに含まれない
        """
        pass

    @abstractmethod
    async def upsert_many(self, legislators: list[Legislator]) -> int:
        """(legislator_id, legislature) を衝突キーとして一括upsert.

        Returns:
            書き込んだ行数
        """
        pass

    @abstractmethod
    async def delete_by_legislature(self, legislature: str) -> int:
        """立法期の行を全て削除し、削除件数を返す."""
        pass

    @abstractmethod
    async def count_by_legislature(self, legislature: str) -> int:
        """立法期の行数を返す."""
        pass


# 呼び出しごとに独立したセッションでリポジトリを使うためのファクトリ
LegislatorRepositoryScope = Callable[
    [], AbstractAsyncContextManager[LegislatorRepository]
]
