"""Pydantic schemas for the price and ratio query endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PriceQuoteResponse(BaseModel):
    """Response body of GET /api/yahoo-finance."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    symbol: str
    ticker: Optional[str] = None
    price: float
    previous_close: Optional[float] = Field(default=None, alias="previousClose")
    change: float = 0.0
    change_percent: float = Field(default=0.0, alias="changePercent")
    pe_ratio: Optional[float] = Field(default=None, alias="peRatio")
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    day_range: Optional[str] = Field(default=None, alias="dayRange")
    volume: Optional[int] = None
    timestamp: int
    is_mock_data: bool = Field(default=False, alias="isMockData")
    source: str = "Yahoo Finance"
    error: Optional[str] = None
    error_details: Optional[str] = Field(default=None, alias="errorDetails")


class RatioQuoteResponse(BaseModel):
    """Response body of GET /api/google-finance."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    symbol: str
    pe_ratio: Optional[float] = Field(default=None, alias="peRatio")
    earnings: Optional[str] = None
    timestamp: int
    is_mock_data: bool = Field(default=False, alias="isMockData")
    source: str = "Google Finance (Scraped)"
    scraping_status: str = Field(default="success", alias="scrapingStatus")
    error: Optional[str] = None
    error_details: Optional[str] = Field(default=None, alias="errorDetails")


class ErrorResponse(BaseModel):
    """Body returned for rejected requests."""

    error: str
    message: Optional[str] = None
