"""API routers package."""

from portfolio_dashboard.api.routers.quotes import router as quotes_router
from portfolio_dashboard.api.routers.holdings import router as holdings_router
from portfolio_dashboard.api.routers.dashboard import router as dashboard_router

__all__ = [
    "quotes_router",
    "holdings_router",
    "dashboard_router",
]
