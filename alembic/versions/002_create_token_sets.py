"""002: create token_sets

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE token_sets (
            id              VARCHAR(256)    NOT NULL,
            schema_hash     VARCHAR(66)     NOT NULL,
            contract        VARCHAR(42)     NOT NULL,
            token_id        NUMERIC(78, 0),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (id, schema_hash)
        );
    """)
    op.execute("COMMENT ON TABLE token_sets IS 'contract:<c> covers a whole collection, token:<c>:<id> a single item';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS token_sets;")
