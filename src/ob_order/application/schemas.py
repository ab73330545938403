"""Request/response schemas for the pool-order reconcile API."""
from pydantic import BaseModel, Field

from src.ob_order.domain.models import PoolEvent, SaveResult

_ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
_TX_HASH_PATTERN = r"^0x[0-9a-fA-F]{64}$"


class PoolEventIn(BaseModel):
    pool: str = Field(..., pattern=_ADDRESS_PATTERN)
    tx_timestamp: int = Field(..., ge=0, description="Block timestamp, unix seconds")
    tx_hash: str = Field(..., pattern=_TX_HASH_PATTERN)

    def to_domain(self) -> PoolEvent:
        return PoolEvent(pool=self.pool.lower(), tx_timestamp=self.tx_timestamp, tx_hash=self.tx_hash)


class ReconcileRequest(BaseModel):
    events: list[PoolEventIn] = Field(..., min_length=1, max_length=500)


class SaveResultOut(BaseModel):
    id: str
    tx_hash: str
    status: str
    trigger_kind: str

    @classmethod
    def from_domain(cls, result: SaveResult) -> "SaveResultOut":
        return cls(
            id=result.id,
            tx_hash=result.tx_hash,
            status=result.status.value,
            trigger_kind=result.trigger_kind.value,
        )


class ReconcileResponse(BaseModel):
    results: list[SaveResultOut]
