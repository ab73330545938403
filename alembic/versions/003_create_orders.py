"""003: create orders table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE orders (
            id                          VARCHAR(66)     PRIMARY KEY,
            kind                        VARCHAR(32)     NOT NULL,
            side                        VARCHAR(4)      NOT NULL,
            fillability_status          VARCHAR(20)     NOT NULL,
            approval_status             VARCHAR(20)     NOT NULL,
            token_set_id                VARCHAR(256)    NOT NULL,
            token_set_schema_hash       VARCHAR(66)     NOT NULL,
            maker                       VARCHAR(42)     NOT NULL,
            taker                       VARCHAR(42)     NOT NULL,
            contract                    VARCHAR(42)     NOT NULL,
            price                       NUMERIC(78, 0)  NOT NULL,
            value                       NUMERIC(78, 0)  NOT NULL,
            currency                    VARCHAR(42)     NOT NULL,
            currency_price              NUMERIC(78, 0),
            currency_value              NUMERIC(78, 0),
            quantity_remaining          NUMERIC(78, 0)  NOT NULL DEFAULT 1,
            valid_between               TSTZRANGE       NOT NULL,
            expiration                  TIMESTAMPTZ     NOT NULL,
            source_id_int               INT             REFERENCES sources (id),
            fee_bps                     INT             NOT NULL DEFAULT 0,
            fee_breakdown               JSONB           NOT NULL DEFAULT '[]',
            raw_data                    JSONB           NOT NULL,
            missing_royalties           JSONB           NOT NULL DEFAULT '[]',
            normalized_value            NUMERIC(78, 0),
            currency_normalized_value   NUMERIC(78, 0),
            created_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_orders_side               CHECK (side IN ('buy', 'sell')),
            CONSTRAINT ck_orders_fillability_status CHECK (
                fillability_status IN ('fillable', 'no-balance', 'cancelled', 'filled', 'expired')
            ),
            CONSTRAINT ck_orders_quantity_remaining CHECK (quantity_remaining >= 0),
            CONSTRAINT ck_orders_fee_bps            CHECK (fee_bps BETWEEN 0 AND 10000)
        );
    """)
    op.execute("""
        CREATE INDEX idx_orders_maker_side_fillable
        ON orders (maker, side)
        WHERE fillability_status = 'fillable';
    """)
    op.execute("CREATE INDEX idx_orders_token_set ON orders (token_set_id, side);")
    op.execute("""
        CREATE TRIGGER trg_orders_updated_at
            BEFORE UPDATE ON orders
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE orders IS 'Pool-derived orders; id is deterministic per (pool, side[, item])';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders CASCADE;")
