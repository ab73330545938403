"""PriceSampler — builds the quote ladder for one pool."""
import logging

from src.ob_pricing.domain.models import QuoteLadder
from src.ob_pricing.domain.oracle import PricingOracleProtocol

logger = logging.getLogger(__name__)


class PriceSampler:
    def __init__(self, oracle: PricingOracleProtocol) -> None:
        self._oracle = oracle

    async def sample(
        self, pool: str, depth: int, slippage_bps: int, chain_id: int
    ) -> QuoteLadder:
        """Quote depths 1..depth one after another.

        Each level prices one more unit on top of the previous ones, so the
        calls are issued sequentially. Unpriceable levels stay in the ladder
        with their missing side set to None; only oracle failures raise.
        """
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        quotes = []
        for level in range(1, depth + 1):
            quotes.append(await self._oracle.quote(pool, level, slippage_bps, chain_id))
        ladder = QuoteLadder(pool=pool, quotes=tuple(quotes))
        logger.debug(
            "Sampled pool=%s levels=%d sell_levels=%d buy_levels=%d",
            pool,
            len(ladder),
            len(ladder.raw_sell_prices()),
            len(ladder.raw_buy_prices()),
        )
        return ladder
