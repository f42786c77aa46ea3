"""Core utilities and shared functionality."""

from portfolio_dashboard.core.timezone import (
    now_market,
    to_market,
    from_epoch_ms,
    to_epoch_ms,
    MARKET_TZ,
)
from portfolio_dashboard.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    DuplicateHoldingError,
    StorageUnavailableError,
)

__all__ = [
    "now_market",
    "to_market",
    "from_epoch_ms",
    "to_epoch_ms",
    "MARKET_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "DuplicateHoldingError",
    "StorageUnavailableError",
]
