"""PricingOracle Protocol — contract for the external bonding-curve pricer."""
from typing import Protocol

from src.ob_pricing.domain.models import PriceQuote


class PricingOracleProtocol(Protocol):
    async def quote(
        self, pool: str, depth: int, slippage_bps: int, chain_id: int
    ) -> PriceQuote: ...
