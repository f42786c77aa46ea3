"""
Price and ratio query endpoints.

Upstream failures are reported in-band: the response is still 200, carries
synthetic values with ``isMockData`` set, and explains the failure in
``error``/``errorDetails``. Only a missing symbol is rejected with 400.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from portfolio_dashboard.api.deps import (
    get_quote_provider,
    get_ratio_provider,
    get_synthetic_data,
)
from portfolio_dashboard.api.schemas import ErrorResponse, PriceQuoteResponse, RatioQuoteResponse
from portfolio_dashboard.core.timezone import now_market, to_epoch_ms
from portfolio_dashboard.domain.models import Exchange
from portfolio_dashboard.providers import QuoteProvider, RatioProvider, SyntheticMarketData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quotes"])

MISSING_SYMBOL = {"error": "Symbol parameter is required"}


def _error_details(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


@router.get(
    "/yahoo-finance",
    response_model=PriceQuoteResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_price_quote(
    symbol: Optional[str] = Query(None, description="Ticker symbol without suffix, e.g. TCS"),
    exchange: str = Query(Exchange.NSE.yahoo_code, description="Yahoo exchange suffix (NS or BO)"),
    provider: QuoteProvider = Depends(get_quote_provider),
    synthetic: SyntheticMarketData = Depends(get_synthetic_data),
):
    """Current price, change and headline ratios for one ticker."""
    if not symbol or not symbol.strip():
        return JSONResponse(status_code=400, content=MISSING_SYMBOL)
    symbol = symbol.strip()
    timestamp = to_epoch_ms(now_market())

    try:
        quote = await provider.get_quote(symbol, exchange)
    except Exception as exc:
        logger.warning("Yahoo Finance lookup failed for %s.%s: %s", symbol, exchange, exc)
        mock = synthetic.quote(symbol, exchange)
        return PriceQuoteResponse(
            symbol=symbol,
            price=mock.price,
            change=mock.change,
            change_percent=mock.change_percent,
            pe_ratio=mock.pe_ratio,
            timestamp=timestamp,
            is_mock_data=True,
            source="Mock Data",
            error="Failed to fetch real data, using mock data",
            error_details=_error_details(exc),
        )

    return PriceQuoteResponse(
        symbol=symbol,
        ticker=quote.ticker,
        price=quote.price,
        previous_close=quote.previous_close,
        change=quote.change,
        change_percent=quote.change_percent,
        pe_ratio=quote.pe_ratio,
        market_cap=quote.market_cap,
        day_range=quote.day_range,
        volume=quote.volume,
        timestamp=timestamp,
        is_mock_data=False,
    )


@router.get(
    "/google-finance",
    response_model=RatioQuoteResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_ratio_quote(
    symbol: Optional[str] = Query(None, description="NSE ticker symbol, e.g. TCS"),
    provider: RatioProvider = Depends(get_ratio_provider),
    synthetic: SyntheticMarketData = Depends(get_synthetic_data),
):
    """P/E ratio and latest earnings scraped from the quote page."""
    if not symbol or not symbol.strip():
        return JSONResponse(status_code=400, content=MISSING_SYMBOL)
    symbol = symbol.strip()
    timestamp = to_epoch_ms(now_market())

    try:
        ratios = await provider.get_ratios(symbol)
    except Exception as exc:
        logger.warning("Google Finance scraping failed for %s: %s", symbol, exc)
        mock = synthetic.ratios(symbol)
        return RatioQuoteResponse(
            symbol=symbol,
            pe_ratio=mock.pe_ratio,
            earnings=mock.earnings,
            timestamp=timestamp,
            is_mock_data=True,
            source="Mock Data (Scraping Failed)",
            scraping_status="failed",
            error="Google Finance scraping failed",
            error_details=_error_details(exc),
        )

    return RatioQuoteResponse(
        symbol=symbol,
        pe_ratio=ratios.pe_ratio,
        earnings=ratios.earnings,
        timestamp=timestamp,
        is_mock_data=False,
    )
