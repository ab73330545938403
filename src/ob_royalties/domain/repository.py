"""RoyaltyRegistry Protocol — default royalty schedules per token set."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_royalties.domain.models import RoyaltyRecipient


class RoyaltyRegistryProtocol(Protocol):
    async def get_royalties(
        self, token_set_id: str, kind: str, db: AsyncSession
    ) -> list[RoyaltyRecipient]: ...
