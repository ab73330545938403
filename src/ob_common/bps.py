"""Integer basis-point arithmetic for wei-denominated amounts.

All prices and amounts are int (smallest currency unit). No float, no Decimal.
"""

from collections.abc import Iterable

BPS_DENOMINATOR = 10_000


def floor_bps_amount(value: int, bps: int) -> int:
    """Portion of value at bps, rounded down: value * bps // 10000."""
    if value == 0 or bps == 0:
        return 0
    return value * bps // BPS_DENOMINATOR


def total_bps(bps_values: Iterable[int]) -> int:
    return sum(bps_values)


def validate_bps(bps: int) -> None:
    """Validate that bps is in the range [0, 10000]."""
    if not (0 <= bps <= BPS_DENOMINATOR):
        raise ValueError(f"Basis points must be between 0 and {BPS_DENOMINATOR}, got {bps}")
