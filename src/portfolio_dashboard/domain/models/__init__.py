"""Domain models package."""

from portfolio_dashboard.domain.models.enums import Exchange, CycleState
from portfolio_dashboard.domain.models.holding import Holding, HoldingCreate, HoldingUpdate
from portfolio_dashboard.domain.models.catalog import CatalogEntry, POPULAR_STOCKS, SAMPLE_HOLDINGS

__all__ = [
    "Exchange",
    "CycleState",
    "Holding",
    "HoldingCreate",
    "HoldingUpdate",
    "CatalogEntry",
    "POPULAR_STOCKS",
    "SAMPLE_HOLDINGS",
]
