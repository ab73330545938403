"""UTC datetime utilities."""

from datetime import datetime, timezone


def from_unix_seconds(ts: int) -> datetime:
    """Convert an on-chain block timestamp to an aware UTC datetime (second precision)."""
    return datetime.fromtimestamp(int(ts), tz=timezone.utc)
