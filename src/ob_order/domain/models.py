"""Order domain models — pure dataclasses, no SQLAlchemy dependency."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.ob_common.addresses import ZERO_ADDRESS
from src.ob_common.datetime_utils import from_unix_seconds
from src.ob_common.enums import (
    ApprovalStatus,
    FeeKind,
    FillabilityStatus,
    OrderSide,
    SaveStatus,
    TriggerKind,
)
from src.ob_royalties.domain.models import MissingRoyalty

ORDER_KIND = "nftx"


@dataclass(frozen=True)
class PoolEvent:
    """On-chain activity that may have moved a pool's prices or inventory."""

    pool: str
    tx_timestamp: int  # unix seconds
    tx_hash: str


@dataclass(frozen=True)
class ValidityWindow:
    valid_from: datetime
    valid_to: datetime | None = None  # None = open ended

    @classmethod
    def open_from(cls, tx_timestamp: int) -> "ValidityWindow":
        return cls(valid_from=from_unix_seconds(tx_timestamp))


@dataclass(frozen=True)
class FeeBreakdownEntry:
    kind: FeeKind
    recipient: str
    bps: int

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind.value, "recipient": self.recipient, "bps": self.bps}


@dataclass
class DerivedOrder:
    id: str
    side: OrderSide
    pool: str
    collection: str
    token_set_id: str
    token_set_schema_hash: str
    price: int
    value: int
    currency: str
    normalized_value: int
    fee_bps: int
    quantity_remaining: int
    validity: ValidityWindow
    source_id: int | None
    raw_data: dict[str, Any]
    item_id: str | None = None  # sell orders only
    fee_breakdown: list[FeeBreakdownEntry] = field(default_factory=list)
    missing_royalties: list[MissingRoyalty] = field(default_factory=list)
    taker: str = ZERO_ADDRESS
    kind: str = ORDER_KIND
    fillability_status: FillabilityStatus = FillabilityStatus.FILLABLE
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED

    @property
    def maker(self) -> str:
        return self.pool


@dataclass(frozen=True)
class OrderRepricing:
    """In-place refresh of a live order; every field is written together."""

    id: str
    price: int
    value: int
    normalized_value: int
    quantity_remaining: int
    validity: ValidityWindow
    fee_bps: int
    fee_breakdown: list[FeeBreakdownEntry]
    missing_royalties: list[MissingRoyalty]
    raw_data: dict[str, Any]


@dataclass(frozen=True)
class OrderExpiry:
    """Tombstones an order whose side the pool can no longer service."""

    id: str
    expiration: datetime
    status: FillabilityStatus = FillabilityStatus.NO_BALANCE


@dataclass(frozen=True)
class SaveResult:
    id: str
    tx_hash: str
    trigger_kind: TriggerKind
    status: SaveStatus = SaveStatus.SUCCESS
