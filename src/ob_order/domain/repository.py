# src/ob_order/domain/repository.py
"""OrderRepository Protocol — interface contract for the order store."""
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_order.domain.models import DerivedOrder, OrderExpiry, OrderRepricing


class OrderRepositoryProtocol(Protocol):
    async def exists(self, order_id: str, db: AsyncSession) -> bool: ...

    async def bulk_insert(self, orders: Sequence[DerivedOrder], db: AsyncSession) -> None: ...

    async def apply_repricing(self, update: OrderRepricing, db: AsyncSession) -> None: ...

    async def apply_expiry(self, expiry: OrderExpiry, db: AsyncSession) -> None: ...
