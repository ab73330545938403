"""Pool domain model — pure dataclass, no SQLAlchemy dependency."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Pool:
    address: str
    collection: str  # NFT contract the pool trades
    vault_id: int

    @property
    def collection_key(self) -> str:
        """Token-set id covering every token of the collection."""
        return f"contract:{self.collection}"
