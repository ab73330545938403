# src/ob_order/infrastructure/persistence.py
"""OrderRepository — raw SQL persistence implementation."""
import json
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.enums import FillabilityStatus
from src.ob_order.domain.models import (
    DerivedOrder,
    FeeBreakdownEntry,
    OrderExpiry,
    OrderRepricing,
    ValidityWindow,
)
from src.ob_royalties.domain.models import MissingRoyalty

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

# valid_to / expiration NULL render as an open-ended 'infinity' bound.
_VALID_BETWEEN = """
    tstzrange(
        date_trunc('seconds', CAST(:valid_from AS TIMESTAMPTZ)),
        COALESCE(CAST(:valid_to AS TIMESTAMPTZ), CAST('infinity' AS TIMESTAMPTZ)),
        '[]'
    )
"""

_EXPIRATION = "COALESCE(CAST(:valid_to AS TIMESTAMPTZ), CAST('infinity' AS TIMESTAMPTZ))"

_EXISTS_SQL = text("""
    SELECT 1 FROM orders WHERE id = :id
""")

_BULK_INSERT_SQL = text(f"""
    INSERT INTO orders (id, kind, side, fillability_status, approval_status,
        token_set_id, token_set_schema_hash, maker, taker, contract,
        price, value, currency, currency_price, currency_value,
        quantity_remaining, valid_between, expiration, source_id_int,
        fee_bps, fee_breakdown, raw_data, missing_royalties,
        normalized_value, currency_normalized_value)
    VALUES (:id, :kind, :side, :fillability_status, :approval_status,
        :token_set_id, :token_set_schema_hash, :maker, :taker, :contract,
        :price, :value, :currency, :price, :value,
        :quantity_remaining, {_VALID_BETWEEN}, {_EXPIRATION}, :source_id,
        :fee_bps, CAST(:fee_breakdown AS JSONB), CAST(:raw_data AS JSONB),
        CAST(:missing_royalties AS JSONB),
        :normalized_value, :normalized_value)
    ON CONFLICT (id) DO NOTHING
""")

_REPRICE_SQL = text(f"""
    UPDATE orders
    SET fillability_status = :fillability_status,
        price = :price, currency_price = :price,
        value = :value, currency_value = :value,
        quantity_remaining = :quantity_remaining,
        valid_between = {_VALID_BETWEEN},
        expiration = {_EXPIRATION},
        raw_data = CAST(:raw_data AS JSONB),
        missing_royalties = CAST(:missing_royalties AS JSONB),
        normalized_value = :normalized_value,
        currency_normalized_value = :normalized_value,
        fee_bps = :fee_bps,
        fee_breakdown = CAST(:fee_breakdown AS JSONB),
        updated_at = NOW()
    WHERE id = :id
""")

_EXPIRE_SQL = text("""
    UPDATE orders
    SET fillability_status = :fillability_status,
        expiration = :expiration,
        updated_at = NOW()
    WHERE id = :id
""")


# ---------------------------------------------------------------------------
# Param mappers
# ---------------------------------------------------------------------------


def _fees_json(entries: Sequence[FeeBreakdownEntry]) -> str:
    return json.dumps([e.to_dict() for e in entries])


def _royalties_json(entries: Sequence[MissingRoyalty]) -> str:
    return json.dumps([r.to_dict() for r in entries])


def _validity_params(validity: ValidityWindow) -> dict[str, Any]:
    return {"valid_from": validity.valid_from, "valid_to": validity.valid_to}


def _order_to_params(order: DerivedOrder) -> dict[str, Any]:
    return {
        "id": order.id,
        "kind": order.kind,
        "side": order.side.value,
        "fillability_status": order.fillability_status.value,
        "approval_status": order.approval_status.value,
        "token_set_id": order.token_set_id,
        "token_set_schema_hash": order.token_set_schema_hash,
        "maker": order.maker,
        "taker": order.taker,
        "contract": order.collection,
        "price": order.price,
        "value": order.value,
        "currency": order.currency,
        "quantity_remaining": order.quantity_remaining,
        "source_id": order.source_id,
        "fee_bps": order.fee_bps,
        "fee_breakdown": _fees_json(order.fee_breakdown),
        "raw_data": json.dumps(order.raw_data),
        "missing_royalties": _royalties_json(order.missing_royalties),
        "normalized_value": order.normalized_value,
        **_validity_params(order.validity),
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL.

    Never commits; the caller owns the transaction.
    """

    async def exists(self, order_id: str, db: AsyncSession) -> bool:
        result = await db.execute(_EXISTS_SQL, {"id": order_id})
        return result.fetchone() is not None

    async def bulk_insert(self, orders: Sequence[DerivedOrder], db: AsyncSession) -> None:
        """Insert all orders in one statement; ids that already exist are skipped."""
        if not orders:
            return
        await db.execute(_BULK_INSERT_SQL, [_order_to_params(o) for o in orders])

    async def apply_repricing(self, update: OrderRepricing, db: AsyncSession) -> None:
        await db.execute(
            _REPRICE_SQL,
            {
                "id": update.id,
                "fillability_status": FillabilityStatus.FILLABLE.value,
                "price": update.price,
                "value": update.value,
                "quantity_remaining": update.quantity_remaining,
                "raw_data": json.dumps(update.raw_data),
                "missing_royalties": _royalties_json(update.missing_royalties),
                "normalized_value": update.normalized_value,
                "fee_bps": update.fee_bps,
                "fee_breakdown": _fees_json(update.fee_breakdown),
                **_validity_params(update.validity),
            },
        )

    async def apply_expiry(self, expiry: OrderExpiry, db: AsyncSession) -> None:
        await db.execute(
            _EXPIRE_SQL,
            {
                "id": expiry.id,
                "fillability_status": expiry.status.value,
                "expiration": expiry.expiration,
            },
        )
