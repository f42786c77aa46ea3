"""Upstream market data provider protocols and base types."""

from typing import Protocol

from portfolio_dashboard.domain.views import MarketQuote, ScrapedRatios


class ProviderError(Exception):
    """Raised by an upstream provider when it cannot produce data."""


class QuoteProvider(Protocol):
    """
    Protocol for upstream price sources.

    Implementations raise ProviderError (or any transport error); the
    quote endpoint turns failures into synthetic data.
    """

    async def get_quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        """Fetch the current quote for symbol on the given exchange code (NS/BO)."""
        ...


class RatioProvider(Protocol):
    """Protocol for upstream P/E and earnings sources."""

    async def get_ratios(self, symbol: str) -> ScrapedRatios:
        """
        Fetch P/E ratio and earnings for symbol.

        Fields that cannot be extracted are None; only transport-level
        problems raise.
        """
        ...
