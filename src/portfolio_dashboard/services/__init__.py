"""Application services: store, adapters, aggregation and refresh."""

from portfolio_dashboard.services.holding_store import PortfolioStore
from portfolio_dashboard.services.portfolio_aggregator import aggregate
from portfolio_dashboard.services.presenter import (
    SortField,
    portfolio_stats,
    sector_breakdown,
    sort_stocks,
)
from portfolio_dashboard.services.quote_adapters import PriceAdapter, RatioAdapter
from portfolio_dashboard.services.refresh_orchestrator import RefreshOrchestrator
from portfolio_dashboard.services.refresh_scheduler import PeriodicRefreshScheduler
from portfolio_dashboard.services.response_cache import ResponseCache

__all__ = [
    "PortfolioStore",
    "aggregate",
    "SortField",
    "portfolio_stats",
    "sector_breakdown",
    "sort_stocks",
    "PriceAdapter",
    "RatioAdapter",
    "RefreshOrchestrator",
    "PeriodicRefreshScheduler",
    "ResponseCache",
]
