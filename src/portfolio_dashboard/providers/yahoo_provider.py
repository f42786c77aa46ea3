"""
Yahoo Finance quote provider via yfinance.

yfinance is blocking, so each lookup runs in a worker thread to keep the
event loop free for sibling fetches.
"""

import asyncio
import logging
import math
from typing import Optional

from portfolio_dashboard.domain.views import MarketQuote
from portfolio_dashboard.providers.market_data_provider import ProviderError

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _as_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # yfinance reports missing numbers as NaN
    return number if math.isfinite(number) else None


def _day_range(info: dict) -> Optional[str]:
    low = _as_float(info.get("dayLow") or info.get("regularMarketDayLow"))
    high = _as_float(info.get("dayHigh") or info.get("regularMarketDayHigh"))
    if low is None or high is None:
        return None
    return f"{low:.2f} - {high:.2f}"


class YahooQuoteProvider:
    """Fetches quotes for NSE/BSE tickers (e.g. ``TCS.NS``) from Yahoo Finance."""

    async def get_quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        return await asyncio.to_thread(self._fetch_quote, symbol, exchange_code)

    def _fetch_quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        ticker = f"{symbol}.{exchange_code}"
        info = _get_yf().Ticker(ticker).info
        if not isinstance(info, dict) or not info:
            raise ProviderError(f"No data found for symbol: {ticker}")

        # Price: regularMarketPrice preferred, then currentPrice
        price = _as_float(info.get("regularMarketPrice")) or _as_float(info.get("currentPrice"))
        if not price:
            raise ProviderError(f"No price available for symbol: {ticker}")

        previous_close = (
            _as_float(info.get("regularMarketPreviousClose"))
            or _as_float(info.get("previousClose"))
            or price
        )
        change = _as_float(info.get("regularMarketChange"))
        if change is None:
            change = price - previous_close
        change_percent = _as_float(info.get("regularMarketChangePercent"))
        if change_percent is None:
            change_percent = (change / previous_close * 100) if previous_close else 0.0

        logger.debug("Fetched %s price=%s", ticker, price)
        return MarketQuote(
            symbol=symbol,
            ticker=ticker,
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=change_percent,
            pe_ratio=_as_float(info.get("trailingPE")) or _as_float(info.get("forwardPE")),
            market_cap=_as_float(info.get("marketCap")),
            day_range=_day_range(info),
            volume=int(_as_float(info.get("regularMarketVolume")) or 0),
        )
