"""HTTP client for the bonding-curve pricing oracle.

Response payload (prices are decimal wei strings, null when unpriceable):
    {
        "currency": "0x...",
        "bps": {"buy": 50, "sell": 50},
        "raw": {"buy": "1000...", "sell": "9000..."},
        "buy": "1020...",
        "sell": "8820..."
    }
"""
import logging
from typing import Any

import httpx

from src.ob_common.addresses import normalize_address
from src.ob_common.errors import PricingOracleUnavailableError
from src.ob_pricing.domain.models import PriceQuote

logger = logging.getLogger(__name__)


def _parse_price(value: Any) -> int | None:
    if value is None or value == "":
        return None
    price = int(value)
    if price < 0:
        raise ValueError(f"Negative price from oracle: {value}")
    return price


def _parse_side(adjusted: Any, raw: Any) -> tuple[int | None, int | None]:
    """A side is priceable only when both the adjusted and raw price are present."""
    adjusted_price = _parse_price(adjusted)
    raw_price = _parse_price(raw)
    if adjusted_price is None or raw_price is None:
        return None, None
    return adjusted_price, raw_price


def parse_quote(depth: int, payload: Any) -> PriceQuote:
    if not isinstance(payload, dict):
        raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
    currency = payload["currency"]
    if not isinstance(currency, str):
        raise TypeError(f"currency must be an address string, got {currency!r}")
    raw = payload.get("raw") or {}
    bps = payload.get("bps") or {}
    buy, raw_buy = _parse_side(payload.get("buy"), raw.get("buy"))
    sell, raw_sell = _parse_side(payload.get("sell"), raw.get("sell"))
    return PriceQuote(
        depth=depth,
        currency=normalize_address(currency),
        buy_fee_bps=int(bps.get("buy", 0)),
        sell_fee_bps=int(bps.get("sell", 0)),
        buy_price=buy,
        sell_price=sell,
        raw_buy_price=raw_buy,
        raw_sell_price=raw_sell,
    )


class HttpPricingOracle:
    """Concrete PricingOracleProtocol over HTTP.

    Timeouts are enforced here, not by the reconciler.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | httpx.Timeout = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpPricingOracle":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def quote(
        self, pool: str, depth: int, slippage_bps: int, chain_id: int
    ) -> PriceQuote:
        try:
            response = await self._client.get(
                f"/pools/{pool}/price",
                params={"depth": depth, "slippageBps": slippage_bps, "chainId": chain_id},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Pricing oracle call failed: pool=%s depth=%d: %s", pool, depth, exc)
            raise PricingOracleUnavailableError(pool, str(exc)) from exc

        try:
            return parse_quote(depth, response.json())
        except (KeyError, TypeError, ValueError) as exc:
            raise PricingOracleUnavailableError(pool, f"malformed quote: {exc}") from exc
