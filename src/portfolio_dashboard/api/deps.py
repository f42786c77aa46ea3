"""Dependency injection for FastAPI."""

from fastapi import Depends

from portfolio_dashboard.app_context import AppContext, get_app_context
from portfolio_dashboard.providers import QuoteProvider, RatioProvider, SyntheticMarketData
from portfolio_dashboard.services import PortfolioStore, RefreshOrchestrator


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_store(context: AppContext = Depends(get_context)) -> PortfolioStore:
    """Provide the PortfolioStore instance."""
    return context.store


def get_orchestrator(context: AppContext = Depends(get_context)) -> RefreshOrchestrator:
    """Provide the RefreshOrchestrator instance."""
    return context.orchestrator


def get_quote_provider(context: AppContext = Depends(get_context)) -> QuoteProvider:
    return context.quote_provider


def get_ratio_provider(context: AppContext = Depends(get_context)) -> RatioProvider:
    return context.ratio_provider


def get_synthetic_data(context: AppContext = Depends(get_context)) -> SyntheticMarketData:
    return context.synthetic
