"""Timezone utilities for Indian market time."""

from datetime import datetime

import pytz

MARKET_TZ = pytz.timezone("Asia/Kolkata")


def now_market() -> datetime:
    """Return current time in the market timezone."""
    return datetime.now(MARKET_TZ)


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the market timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already market time
        return MARKET_TZ.localize(dt)
    return dt.astimezone(MARKET_TZ)


def from_epoch_ms(value: int) -> datetime:
    """Convert an epoch-milliseconds timestamp to a market-time datetime."""
    return datetime.fromtimestamp(value / 1000, tz=pytz.utc).astimezone(MARKET_TZ)


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds."""
    return int(to_market(dt).timestamp() * 1000)
