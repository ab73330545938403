"""PoolRepository Protocol — pool details and inventory provider."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_pools.domain.models import Pool


class PoolRepositoryProtocol(Protocol):
    async def get_pool_details(self, pool: str, db: AsyncSession) -> Pool | None: ...

    async def get_items_held(
        self, collection: str, owner: str, db: AsyncSession
    ) -> list[str]: ...
