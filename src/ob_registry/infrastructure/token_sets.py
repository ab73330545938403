"""TokenSetRepository — idempotent token-set registration (raw SQL)."""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.addresses import normalize_address

_INSERT_TOKEN_SET_SQL = text("""
    INSERT INTO token_sets (id, schema_hash, contract, token_id)
    VALUES (:id, :schema_hash, :contract, CAST(:token_id AS NUMERIC(78, 0)))
    ON CONFLICT (id, schema_hash) DO NOTHING
""")

_GET_TOKEN_SET_SQL = text("""
    SELECT id FROM token_sets
    WHERE id = :id AND schema_hash = :schema_hash
""")


def contract_wide_token_set_id(collection: str) -> str:
    return f"contract:{normalize_address(collection)}"


def single_token_set_id(collection: str, token_id: str) -> str:
    return f"token:{normalize_address(collection)}:{token_id}"


class TokenSetRepository:
    """Concrete implementation of TokenSetRepositoryProtocol.

    Returns the token-set id once the row exists, None if it could not be
    stored. Commit is left to the caller.
    """

    async def save_contract_wide(
        self, collection: str, schema_hash: str, db: AsyncSession
    ) -> str | None:
        return await self._save(
            contract_wide_token_set_id(collection), schema_hash, collection, None, db
        )

    async def save_single_token(
        self, collection: str, token_id: str, schema_hash: str, db: AsyncSession
    ) -> str | None:
        return await self._save(
            single_token_set_id(collection, token_id), schema_hash, collection, token_id, db
        )

    async def _save(
        self,
        token_set_id: str,
        schema_hash: str,
        collection: str,
        token_id: str | None,
        db: AsyncSession,
    ) -> str | None:
        params = {"id": token_set_id, "schema_hash": schema_hash}
        await db.execute(
            _INSERT_TOKEN_SET_SQL,
            {**params, "contract": normalize_address(collection), "token_id": token_id},
        )
        row = (await db.execute(_GET_TOKEN_SET_SQL, params)).fetchone()
        return row.id if row else None
