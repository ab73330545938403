"""Royalty domain models."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RoyaltyRecipient:
    recipient: str
    bps: int


@dataclass(frozen=True)
class MissingRoyalty:
    """Royalty the pool fee does not already pay, folded into normalized value."""

    bps: int
    amount: int
    recipient: str

    def to_dict(self) -> dict[str, object]:
        return {"bps": self.bps, "amount": str(self.amount), "recipient": self.recipient}


@dataclass(frozen=True)
class RoyaltyTopUp:
    normalized_value: int
    missing_royalties: list[MissingRoyalty] = field(default_factory=list)

    @property
    def missing_amount(self) -> int:
        return sum(r.amount for r in self.missing_royalties)
