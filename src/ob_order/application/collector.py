"""NewOrderCollector — shared insert buffer for one reconcile batch."""
import asyncio

from src.ob_order.domain.models import DerivedOrder, SaveResult


class NewOrderCollector:
    """Append-only buffer of (order, result) pairs, safe across concurrent pool tasks.

    Drained once, after every pool task of the batch has finished.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._orders: list[DerivedOrder] = []
        self._results: list[SaveResult] = []

    async def add(self, order: DerivedOrder, result: SaveResult) -> None:
        async with self._lock:
            self._orders.append(order)
            self._results.append(result)

    async def drain(self) -> tuple[list[DerivedOrder], list[SaveResult]]:
        async with self._lock:
            orders, results = self._orders, self._results
            self._orders, self._results = [], []
            return orders, results

    def __len__(self) -> int:
        return len(self._orders)
