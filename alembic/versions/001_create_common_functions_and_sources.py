"""001: create common functions + sources

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE sources (
            id          SERIAL          PRIMARY KEY,
            domain      VARCHAR(255)    NOT NULL,
            name        VARCHAR(255)    NOT NULL,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_sources_domain UNIQUE (domain)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS sources;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
