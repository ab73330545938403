"""Registry Protocols — token sets and order sources."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

# Schema hash of a token set without attribute filters.
EMPTY_SCHEMA_HASH = "0x" + "00" * 32


class TokenSetRepositoryProtocol(Protocol):
    async def save_contract_wide(
        self, collection: str, schema_hash: str, db: AsyncSession
    ) -> str | None: ...

    async def save_single_token(
        self, collection: str, token_id: str, schema_hash: str, db: AsyncSession
    ) -> str | None: ...


class SourceRepositoryProtocol(Protocol):
    async def get_or_insert(self, domain: str, db: AsyncSession) -> int: ...
