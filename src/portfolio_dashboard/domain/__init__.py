"""Domain layer - pure business models with no external dependencies."""

from portfolio_dashboard.domain.models import (
    Holding,
    HoldingCreate,
    HoldingUpdate,
    Exchange,
    CycleState,
    CatalogEntry,
    POPULAR_STOCKS,
    SAMPLE_HOLDINGS,
)

__all__ = [
    "Holding",
    "HoldingCreate",
    "HoldingUpdate",
    "Exchange",
    "CycleState",
    "CatalogEntry",
    "POPULAR_STOCKS",
    "SAMPLE_HOLDINGS",
]
