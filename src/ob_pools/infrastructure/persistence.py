"""PoolRepository — raw SQL reads of pool details and pool-held items."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.addresses import normalize_address
from src.ob_pools.domain.models import Pool

_GET_POOL_SQL = text("""
    SELECT address, nft, vault_id
    FROM nftx_nft_pools WHERE address = :address
""")

_GET_ITEMS_HELD_SQL = text("""
    SELECT CAST(token_id AS TEXT) AS token_id
    FROM nft_balances
    WHERE contract = :contract AND owner = :owner AND amount > 0
    ORDER BY token_id
""")


def _row_to_pool(row: Any) -> Pool:
    return Pool(
        address=row.address,
        collection=row.nft,
        vault_id=int(row.vault_id),
    )


class PoolRepository:
    """Concrete implementation of PoolRepositoryProtocol. Never caches."""

    async def get_pool_details(self, pool: str, db: AsyncSession) -> Pool | None:
        result = await db.execute(_GET_POOL_SQL, {"address": normalize_address(pool)})
        row = result.fetchone()
        return _row_to_pool(row) if row else None

    async def get_items_held(
        self, collection: str, owner: str, db: AsyncSession
    ) -> list[str]:
        result = await db.execute(
            _GET_ITEMS_HELD_SQL,
            {"contract": normalize_address(collection), "owner": normalize_address(owner)},
        )
        return [row.token_id for row in result.fetchall()]
