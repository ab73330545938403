"""Outcome of one unit of reconciliation work (pool event, leg, or item)."""
from dataclasses import dataclass, field

from src.ob_order.domain.models import SaveResult


@dataclass
class Outcome:
    scope: str
    results: list[SaveResult] = field(default_factory=list)
    error: Exception | None = None
    skipped: bool = False
    failed_units: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def merge(cls, scope: str, parts: list["Outcome"]) -> "Outcome":
        """Combine sibling units. A failed sibling contributes no results and
        does not fail the parent."""
        return cls(
            scope=scope,
            results=[r for p in parts for r in p.results],
            failed_units=sum(p.failed_units + (0 if p.ok else 1) for p in parts),
        )
