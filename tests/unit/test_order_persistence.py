# tests/unit/test_order_persistence.py
"""Unit tests for OrderRepository using AsyncMock AsyncSession."""
import json
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ob_common.enums import FeeKind, OrderSide
from src.ob_order.domain.models import (
    DerivedOrder,
    FeeBreakdownEntry,
    OrderExpiry,
    OrderRepricing,
    ValidityWindow,
)
from src.ob_order.infrastructure.persistence import OrderRepository
from src.ob_royalties.domain.models import MissingRoyalty

POOL = "0x569a0ff212efe6b2fac806765ef59ce6685f2dd2"
VALID_FROM = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _make_order(**kwargs: Any) -> DerivedOrder:
    defaults: dict[str, Any] = dict(
        id="0xorder1",
        side=OrderSide.SELL,
        pool=POOL,
        collection="0xc0",
        item_id="7",
        token_set_id="token:0xc0:7",
        token_set_schema_hash="0x" + "00" * 32,
        price=10**18,
        value=102 * 10**16,
        currency="0xweth",
        normalized_value=107 * 10**16,
        fee_bps=50,
        fee_breakdown=[FeeBreakdownEntry(FeeKind.MARKETPLACE, POOL, 50)],
        missing_royalties=[MissingRoyalty(bps=500, amount=5 * 10**16, recipient="0xa1")],
        quantity_remaining=1,
        validity=ValidityWindow(valid_from=VALID_FROM),
        source_id=3,
        raw_data={"pool": POOL},
    )
    defaults.update(kwargs)
    return DerivedOrder(**defaults)


class TestOrderRepository:
    @pytest.mark.asyncio
    async def test_exists_true(self) -> None:
        db = AsyncMock()
        result_mock = MagicMock()
        result_mock.fetchone.return_value = (1,)
        db.execute.return_value = result_mock
        assert await OrderRepository().exists("0xorder1", db) is True

    @pytest.mark.asyncio
    async def test_exists_false(self) -> None:
        db = AsyncMock()
        result_mock = MagicMock()
        result_mock.fetchone.return_value = None
        db.execute.return_value = result_mock
        assert await OrderRepository().exists("missing", db) is False

    @pytest.mark.asyncio
    async def test_bulk_insert_single_statement(self) -> None:
        db = AsyncMock()
        orders = [_make_order(id=f"0x{i}") for i in range(3)]
        await OrderRepository().bulk_insert(orders, db)

        db.execute.assert_awaited_once()
        sql, params = db.execute.call_args.args
        assert "ON CONFLICT (id) DO NOTHING" in str(sql)
        assert [p["id"] for p in params] == ["0x0", "0x1", "0x2"]

    @pytest.mark.asyncio
    async def test_bulk_insert_params(self) -> None:
        db = AsyncMock()
        await OrderRepository().bulk_insert([_make_order()], db)
        params = db.execute.call_args.args[1][0]

        assert params["side"] == "sell"
        assert params["maker"] == POOL
        assert params["taker"] == "0x0000000000000000000000000000000000000000"
        assert params["contract"] == "0xc0"
        assert params["fillability_status"] == "fillable"
        assert params["approval_status"] == "approved"
        assert params["valid_from"] == VALID_FROM
        assert params["valid_to"] is None
        assert json.loads(params["fee_breakdown"]) == [
            {"kind": "marketplace", "recipient": POOL, "bps": 50}
        ]
        assert json.loads(params["missing_royalties"]) == [
            {"bps": 500, "amount": str(5 * 10**16), "recipient": "0xa1"}
        ]
        assert json.loads(params["raw_data"]) == {"pool": POOL}

    @pytest.mark.asyncio
    async def test_bulk_insert_empty_is_noop(self) -> None:
        db = AsyncMock()
        await OrderRepository().bulk_insert([], db)
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_apply_repricing_writes_all_fields(self) -> None:
        db = AsyncMock()
        update = OrderRepricing(
            id="0xorder1",
            price=9 * 10**17,
            value=88 * 10**16,
            normalized_value=88 * 10**16,
            quantity_remaining=3,
            validity=ValidityWindow(valid_from=VALID_FROM),
            fee_bps=50,
            fee_breakdown=[FeeBreakdownEntry(FeeKind.MARKETPLACE, POOL, 50)],
            missing_royalties=[],
            raw_data={"price": "900000000000000000"},
        )
        await OrderRepository().apply_repricing(update, db)

        db.execute.assert_awaited_once()
        sql, params = db.execute.call_args.args
        assert "UPDATE orders" in str(sql)
        assert params["id"] == "0xorder1"
        assert params["fillability_status"] == "fillable"
        assert params["price"] == 9 * 10**17
        assert params["quantity_remaining"] == 3
        assert params["missing_royalties"] == "[]"
        assert params["valid_to"] is None

    @pytest.mark.asyncio
    async def test_apply_expiry_marks_no_balance(self) -> None:
        db = AsyncMock()
        expiration = datetime(2026, 10, 2, tzinfo=timezone.utc)
        await OrderRepository().apply_expiry(OrderExpiry(id="0xorder1", expiration=expiration), db)

        params = db.execute.call_args.args[1]
        assert params == {
            "id": "0xorder1",
            "fillability_status": "no-balance",
            "expiration": expiration,
        }

    def test_maker_is_pool(self) -> None:
        assert _make_order().maker == POOL
