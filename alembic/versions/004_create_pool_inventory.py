"""004: pool inventory — nftx_nft_pools, nft_balances, royalty_schedules

Revision ID: 004
Revises: 003
Create Date: 2026-10-19

These tables are written by the chain indexer; this service only reads them.
"""
from typing import Sequence, Union

from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE nftx_nft_pools (
            address     VARCHAR(42)     PRIMARY KEY,
            nft         VARCHAR(42)     NOT NULL,
            vault_id    NUMERIC(78, 0)  NOT NULL
        );
    """)
    op.execute("""
        CREATE TABLE nft_balances (
            contract    VARCHAR(42)     NOT NULL,
            token_id    NUMERIC(78, 0)  NOT NULL,
            owner       VARCHAR(42)     NOT NULL,
            amount      NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            PRIMARY KEY (contract, token_id, owner)
        );
    """)
    op.execute("CREATE INDEX idx_nft_balances_owner ON nft_balances (contract, owner) WHERE amount > 0;")
    op.execute("""
        CREATE TABLE royalty_schedules (
            token_set_id    VARCHAR(256)    NOT NULL,
            kind            VARCHAR(32)     NOT NULL,
            position        SMALLINT        NOT NULL,
            recipient       VARCHAR(42)     NOT NULL,
            bps             INT             NOT NULL,
            PRIMARY KEY (token_set_id, kind, position),
            CONSTRAINT ck_royalty_schedules_bps CHECK (bps BETWEEN 0 AND 10000)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS royalty_schedules;")
    op.execute("DROP TABLE IF EXISTS nft_balances;")
    op.execute("DROP TABLE IF EXISTS nftx_nft_pools;")
