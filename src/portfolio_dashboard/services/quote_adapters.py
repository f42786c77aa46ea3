"""
Quote provider adapters: HTTP clients for the price and ratio endpoints.

Both adapters share one contract: a failed fetch never raises. The caller
gets a result tagged synthetic with a human-readable warning, and the
dashboard keeps rendering.
"""

import logging
from decimal import Decimal
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaError

from portfolio_dashboard.api.schemas.quotes import PriceQuoteResponse, RatioQuoteResponse
from portfolio_dashboard.core.timezone import from_epoch_ms, now_market
from portfolio_dashboard.domain.models import Exchange
from portfolio_dashboard.domain.views import PriceQuote, RatioQuote
from portfolio_dashboard.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

PRICE_ENDPOINT = "/api/yahoo-finance"
RATIO_ENDPOINT = "/api/google-finance"

SIMULATED_PRICE_WARNING = "Using simulated data - real market data unavailable"
SIMULATED_RATIO_WARNING = "Using simulated data - real P/E and earnings unavailable"


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def _to_decimal(value: Optional[float]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


class PriceAdapter:
    """Fetches current price and change for one symbol/exchange pair."""

    def __init__(self, client: httpx.AsyncClient, cache: ResponseCache, timeout: float = 15.0):
        self._client = client
        self._cache = cache
        self._timeout = timeout

    async def fetch(self, symbol: str, exchange: Exchange = Exchange.NSE) -> PriceQuote:
        cache_key = f"yahoo_{symbol}_{exchange.value}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await self._client.get(
                PRICE_ENDPOINT,
                params={"symbol": symbol, "exchange": exchange.yahoo_code},
                timeout=self._timeout,
            )
            response.raise_for_status()
            body = PriceQuoteResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            logger.warning("Price fetch failed for %s (%s): %s", symbol, exchange.value, _describe(exc))
            return self._fallback(symbol, f"Network error: {_describe(exc)}")
        except (SchemaError, ValueError) as exc:
            logger.warning("Malformed price response for %s: %s", symbol, _describe(exc))
            return self._fallback(symbol, "Invalid price data received")

        quote = PriceQuote(
            symbol=symbol,
            price=_to_decimal(body.price),
            change=Decimal(str(body.change)),
            change_percent=Decimal(str(body.change_percent)),
            as_of=from_epoch_ms(body.timestamp),
            is_synthetic=body.is_mock_data,
            warning=SIMULATED_PRICE_WARNING if body.is_mock_data else None,
        )
        self._cache.set(cache_key, quote)
        return quote

    @staticmethod
    def _fallback(symbol: str, warning: str) -> PriceQuote:
        # No usable price: the aggregator falls back to the purchase price
        return PriceQuote(
            symbol=symbol,
            price=None,
            change=Decimal("0"),
            change_percent=Decimal("0"),
            as_of=now_market(),
            is_synthetic=True,
            warning=warning,
        )


class RatioAdapter:
    """Fetches P/E ratio and latest earnings label for one symbol."""

    def __init__(self, client: httpx.AsyncClient, cache: ResponseCache, timeout: float = 20.0):
        self._client = client
        self._cache = cache
        self._timeout = timeout

    async def fetch(self, symbol: str) -> RatioQuote:
        cache_key = f"google_{symbol}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await self._client.get(
                RATIO_ENDPOINT,
                params={"symbol": symbol},
                timeout=self._timeout,
            )
            response.raise_for_status()
            body = RatioQuoteResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            logger.warning("Ratio fetch failed for %s: %s", symbol, _describe(exc))
            return self._fallback(symbol, f"Scraping failed: {_describe(exc)}")
        except (SchemaError, ValueError) as exc:
            logger.warning("Malformed ratio response for %s: %s", symbol, _describe(exc))
            return self._fallback(symbol, "Invalid ratio data received")

        quote = RatioQuote(
            symbol=symbol,
            pe_ratio=_to_decimal(body.pe_ratio),
            earnings_label=body.earnings,
            as_of=from_epoch_ms(body.timestamp),
            is_synthetic=body.is_mock_data,
            warning=SIMULATED_RATIO_WARNING if body.is_mock_data else None,
        )
        self._cache.set(cache_key, quote)
        return quote

    @staticmethod
    def _fallback(symbol: str, warning: str) -> RatioQuote:
        return RatioQuote(
            symbol=symbol,
            pe_ratio=None,
            earnings_label=None,
            as_of=now_market(),
            is_synthetic=True,
            warning=warning,
        )
