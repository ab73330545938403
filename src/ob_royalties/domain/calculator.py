"""Royalty top-up — royalties the AMM pool fee does not pay on its own."""
import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.ob_common.addresses import ZERO_ADDRESS, normalize_address
from src.ob_common.bps import floor_bps_amount, total_bps
from src.ob_common.enums import OrderSide
from src.ob_royalties.domain.models import MissingRoyalty, RoyaltyRecipient, RoyaltyTopUp
from src.ob_royalties.domain.repository import RoyaltyRegistryProtocol

logger = logging.getLogger(__name__)

DEFAULT_SCHEDULE = "default"

# The pool protocol has no on-chain royalty support.
BUILT_IN_ROYALTY_BPS = 0


def top_up(
    price: int,
    value: int,
    side: OrderSide,
    default_royalties: Sequence[RoyaltyRecipient],
    built_in_bps: int = BUILT_IN_ROYALTY_BPS,
) -> RoyaltyTopUp:
    """Fold the royalty gap into the order's value.

    The missing amount is taken on the raw curve price. Buy orders hand the
    taker less (value - amount); sell orders charge the taker more
    (value + amount). The whole gap goes to the first valid recipient.
    """
    default_bps = total_bps(r.bps for r in default_royalties)
    if default_bps <= built_in_bps:
        return RoyaltyTopUp(normalized_value=value)

    valid = [
        r
        for r in default_royalties
        if r.bps and r.recipient and normalize_address(r.recipient) != ZERO_ADDRESS
    ]
    if not valid:
        return RoyaltyTopUp(normalized_value=value)

    diff_bps = default_bps - built_in_bps
    amount = floor_bps_amount(price, diff_bps)
    # TODO: split pro-rata across all valid recipients once consumers accept multiple entries
    missing = MissingRoyalty(bps=diff_bps, amount=amount, recipient=valid[0].recipient)

    if side is OrderSide.BUY:
        normalized = value - amount
    else:
        normalized = value + amount
    return RoyaltyTopUp(normalized_value=normalized, missing_royalties=[missing])


class RoyaltyTopUpCalculator:
    def __init__(self, registry: RoyaltyRegistryProtocol) -> None:
        self._registry = registry

    async def compute(
        self,
        collection_key: str,
        price: int,
        value: int,
        side: OrderSide,
        db: AsyncSession,
    ) -> RoyaltyTopUp:
        royalties = await self._registry.get_royalties(collection_key, DEFAULT_SCHEDULE, db)
        result = top_up(price, value, side, royalties)
        if result.missing_royalties:
            logger.debug(
                "Royalty top-up: key=%s side=%s amount=%d",
                collection_key,
                side.value,
                result.missing_amount,
            )
        return result
