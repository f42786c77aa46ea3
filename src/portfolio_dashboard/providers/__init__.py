"""Upstream market data providers module."""

from portfolio_dashboard.providers.market_data_provider import (
    ProviderError,
    QuoteProvider,
    RatioProvider,
)
from portfolio_dashboard.providers.yahoo_provider import YahooQuoteProvider
from portfolio_dashboard.providers.google_finance_provider import GoogleFinanceRatioProvider
from portfolio_dashboard.providers.stub_provider import SyntheticMarketData

__all__ = [
    "ProviderError",
    "QuoteProvider",
    "RatioProvider",
    "YahooQuoteProvider",
    "GoogleFinanceRatioProvider",
    "SyntheticMarketData",
]
