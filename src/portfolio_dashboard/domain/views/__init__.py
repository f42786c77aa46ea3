"""View models for provider and service outputs."""

from portfolio_dashboard.domain.views.portfolio import (
    PriceQuote,
    RatioQuote,
    LiveFields,
    DerivedStock,
    SectorSummary,
    PortfolioSnapshot,
    PortfolioStats,
    MarketQuote,
    ScrapedRatios,
)

__all__ = [
    "PriceQuote",
    "RatioQuote",
    "LiveFields",
    "DerivedStock",
    "SectorSummary",
    "PortfolioSnapshot",
    "PortfolioStats",
    "MarketQuote",
    "ScrapedRatios",
]
