"""Global enums — values must match DB CHECK constraints and the
order-updates queue contract exactly."""

from enum import Enum


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class FillabilityStatus(str, Enum):
    FILLABLE = "fillable"
    NO_BALANCE = "no-balance"


class ApprovalStatus(str, Enum):
    APPROVED = "approved"


class TriggerKind(str, Enum):
    """Why downstream should re-index an order."""
    NEW_ORDER = "new-order"
    REPRICE = "reprice"


class SaveStatus(str, Enum):
    SUCCESS = "success"


class FeeKind(str, Enum):
    MARKETPLACE = "marketplace"
