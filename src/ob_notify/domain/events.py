"""Order-changed events consumed by the downstream order indexer."""
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from src.ob_common.enums import TriggerKind
from src.ob_order.domain.models import SaveResult


@dataclass(frozen=True)
class OrderChangedEvent:
    id: str
    tx_hash: str
    trigger_kind: TriggerKind

    @property
    def context(self) -> str:
        """Dedup key downstream: one message per (kind, order, transaction)."""
        return f"{self.trigger_kind.value}-{self.id}-{self.tx_hash}"

    @classmethod
    def from_result(cls, result: SaveResult) -> "OrderChangedEvent":
        return cls(id=result.id, tx_hash=result.tx_hash, trigger_kind=result.trigger_kind)

    def to_message(self) -> dict[str, object]:
        return {
            "id": self.id,
            "context": self.context,
            "trigger": {"kind": self.trigger_kind.value, "tx_hash": self.tx_hash},
        }


class OrderNotifierProtocol(Protocol):
    async def publish(self, events: Sequence[OrderChangedEvent]) -> None: ...
