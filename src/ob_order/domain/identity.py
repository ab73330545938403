"""Deterministic order ids for pool-derived orders.

Buy orders: one id per pool. Sell orders: one id per (pool, item).
"""

import hashlib

from src.ob_common.addresses import normalize_address
from src.ob_common.enums import OrderSide

_DOMAIN_TAG = "nftx"
_SEPARATOR = "\x1f"


def _normalize_item_id(item_id: str | int) -> str:
    try:
        value = int(item_id)
    except (TypeError, ValueError):
        raise ValueError(f"Item id must be a non-negative integer, got {item_id!r}") from None
    if value < 0:
        raise ValueError(f"Item id must be a non-negative integer, got {item_id!r}")
    return str(value)


def get_order_id(pool: str, side: OrderSide, item_id: str | int | None = None) -> str:
    """Return the 0x-prefixed SHA-256 identity of a pool order."""
    parts = [_DOMAIN_TAG, normalize_address(pool), side.value]
    if side is OrderSide.SELL:
        if item_id is None:
            raise ValueError("Sell order id requires an item id")
        parts.append(_normalize_item_id(item_id))
    digest = hashlib.sha256(_SEPARATOR.join(parts).encode("utf-8")).hexdigest()
    return f"0x{digest}"
