"""Settlement payload for pool orders (stored as orders.raw_data).

The payload carries everything a filler needs to route the trade through
the pool's vault: the swap path, the curve prices per unit and, for sell
orders, the specific item being bought.
"""
from typing import Any

from src.ob_common.addresses import weth_address
from src.ob_common.enums import OrderSide
from src.ob_pools.domain.models import Pool


class PoolOrderEncoder:
    def __init__(self, chain_id: int) -> None:
        self._chain_id = chain_id

    def encode(
        self,
        pool: Pool,
        side: OrderSide,
        price: int,
        prices: list[int],
        item_id: str | None = None,
    ) -> dict[str, Any]:
        weth = weth_address(self._chain_id)
        params: dict[str, Any] = {
            "vaultId": str(pool.vault_id),
            "collection": pool.collection,
            "pool": pool.address,
            "specificIds": [] if item_id is None else [item_id],
            "currency": weth,
            "price": str(price),
            "extra": {"prices": [str(p) for p in prices]},
        }
        if side is OrderSide.BUY:
            # Taker sells the item into the vault, proceeds swapped to WETH
            params["path"] = [pool.address, weth]
        else:
            params["amount"] = "1"
            params["path"] = [weth, pool.address]
        return params
