"""Price quote domain models — pure dataclasses, no I/O."""
from dataclasses import dataclass


@dataclass(frozen=True)
class PriceQuote:
    """Marginal price of one more unit at a given curve depth.

    "sell" prices are what a taker receives selling an item into the pool;
    "buy" prices are what a taker pays to take an item out. Raw prices are
    the bare curve price, the others have the oracle's slippage tolerance
    applied. A side that the pool cannot service at this depth has both of
    its prices set to None.
    """

    depth: int
    currency: str
    buy_fee_bps: int
    sell_fee_bps: int
    buy_price: int | None = None
    sell_price: int | None = None
    raw_buy_price: int | None = None
    raw_sell_price: int | None = None


@dataclass(frozen=True)
class QuoteLadder:
    """Quotes for depths 1..K in depth order."""

    pool: str
    quotes: tuple[PriceQuote, ...]

    def __post_init__(self) -> None:
        if not self.quotes:
            raise ValueError("Quote ladder must contain at least one level")

    def __len__(self) -> int:
        return len(self.quotes)

    @property
    def first(self) -> PriceQuote:
        return self.quotes[0]

    def raw_sell_prices(self) -> list[int]:
        return [q.raw_sell_price for q in self.quotes if q.raw_sell_price is not None]

    def raw_buy_prices(self) -> list[int]:
        return [q.raw_buy_price for q in self.quotes if q.raw_buy_price is not None]
