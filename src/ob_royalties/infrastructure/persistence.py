"""RoyaltyRegistry — raw SQL reads of royalty schedules."""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_royalties.domain.models import RoyaltyRecipient

_GET_ROYALTIES_SQL = text("""
    SELECT recipient, bps
    FROM royalty_schedules
    WHERE token_set_id = :token_set_id AND kind = :kind
    ORDER BY position
""")


class RoyaltyRegistry:
    """Concrete implementation of RoyaltyRegistryProtocol."""

    async def get_royalties(
        self, token_set_id: str, kind: str, db: AsyncSession
    ) -> list[RoyaltyRecipient]:
        result = await db.execute(
            _GET_ROYALTIES_SQL, {"token_set_id": token_set_id, "kind": kind}
        )
        return [
            RoyaltyRecipient(recipient=row.recipient, bps=int(row.bps))
            for row in result.fetchall()
        ]
