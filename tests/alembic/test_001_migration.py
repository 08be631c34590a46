"""マイグレーション001のテスト: legislators テーブルの作成."""

import importlib.util

from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(scope="module")
def migration_001():
    """マイグレーションモジュールをimportlibでロードする."""
    migration_path = (
        Path(__file__).parent.parent.parent
        / "alembic"
        / "versions"
        / "001_create_legislators_table.py"
    )
    spec = importlib.util.spec_from_file_location("migration_001", migration_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestMigration001:
    """マイグレーション001の正当性テスト."""

    def test_revision_chain(self, migration_001) -> None:
        """最初のリビジョンであること."""
        assert migration_001.revision == "001"
        assert migration_001.down_revision is None

    def test_upgrade_creates_table_with_natural_key(self, migration_001) -> None:
        """(legislator_id, legislature) の一意制約付きでテーブルを作ること."""
        with patch.object(migration_001, "op") as mock_op:
            migration_001.upgrade()

            mock_op.execute.assert_called_once()
            sql = mock_op.execute.call_args[0][0]

            assert "CREATE TABLE IF NOT EXISTS legislators" in sql
            assert "UNIQUE (legislator_id, legislature)" in sql
            for column in (
                "first_name",
                "last_name",
                "full_name",
                "political_group",
                "political_group_id",
                "profession",
                "created_at",
                "updated_at",
            ):
                assert column in sql

    def test_downgrade_drops_table(self, migration_001) -> None:
        """downgradeでテーブルを削除すること."""
        with patch.object(migration_001, "op") as mock_op:
            migration_001.downgrade()
            sql = mock_op.execute.call_args[0][0]

            assert "DROP TABLE IF EXISTS legislators" in sql
