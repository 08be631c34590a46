"""議員テーブルの作成.

Revision ID: 001
Revises:
Create Date: 2026-10-18

議員ID（PA + 数字）と立法期の組で一意になる議員名簿テーブル。
同期ジョブは (legislator_id, legislature) を衝突キーとして upsert する。
"""

from alembic import op


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply migration: create legislators table."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS legislators (
            id SERIAL PRIMARY KEY,
            legislator_id VARCHAR(32) NOT NULL,
            first_name VARCHAR(255) NOT NULL DEFAULT '',
            last_name VARCHAR(255) NOT NULL DEFAULT '',
            full_name VARCHAR(511),
            legislature VARCHAR(8) NOT NULL,
            political_group VARCHAR(255),
            political_group_id VARCHAR(32),
            profession VARCHAR(255),
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            CONSTRAINT uq_legislators_legislator_id_legislature
                UNIQUE (legislator_id, legislature)
        );

        CREATE INDEX IF NOT EXISTS idx_legislators_legislature
        ON legislators (legislature);

        CREATE INDEX IF NOT EXISTS idx_legislators_last_name
        ON legislators (last_name);
    """)


def downgrade() -> None:
    """Rollback migration: drop legislators table."""
    op.execute("""
        DROP INDEX IF EXISTS idx_legislators_last_name;
        DROP INDEX IF EXISTS idx_legislators_legislature;
        DROP TABLE IF EXISTS legislators;
    """)
