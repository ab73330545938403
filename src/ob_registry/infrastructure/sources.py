"""SourceRepository — maps an order source domain to its integer id."""
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.errors import InternalError

logger = logging.getLogger(__name__)

_INSERT_SOURCE_SQL = text("""
    INSERT INTO sources (domain, name)
    VALUES (:domain, :domain)
    ON CONFLICT (domain) DO NOTHING
""")

_GET_SOURCE_SQL = text("""
    SELECT id FROM sources WHERE domain = :domain
""")


class SourceRepository:
    """Concrete implementation of SourceRepositoryProtocol.

    Source ids never change once assigned, so resolved ids are memoized for
    the life of the process.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    async def get_or_insert(self, domain: str, db: AsyncSession) -> int:
        cached = self._ids.get(domain)
        if cached is not None:
            return cached

        row = (await db.execute(_GET_SOURCE_SQL, {"domain": domain})).fetchone()
        if row is None:
            await db.execute(_INSERT_SOURCE_SQL, {"domain": domain})
            row = (await db.execute(_GET_SOURCE_SQL, {"domain": domain})).fetchone()
            if row is None:
                raise InternalError(f"Source insert returned no rows for {domain}")
            logger.info("Registered order source: domain=%s id=%s", domain, row.id)

        self._ids[domain] = int(row.id)
        return self._ids[domain]
