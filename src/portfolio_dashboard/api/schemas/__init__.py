"""Pydantic schemas for API request/response."""

from portfolio_dashboard.api.schemas.quotes import (
    PriceQuoteResponse,
    RatioQuoteResponse,
    ErrorResponse,
)
from portfolio_dashboard.api.schemas.holding import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    CatalogEntryResponse,
)
from portfolio_dashboard.api.schemas.dashboard import (
    DerivedStockResponse,
    SectorResponse,
    SnapshotResponse,
    StatsResponse,
    DashboardResponse,
)

__all__ = [
    "PriceQuoteResponse",
    "RatioQuoteResponse",
    "ErrorResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "CatalogEntryResponse",
    "DerivedStockResponse",
    "SectorResponse",
    "SnapshotResponse",
    "StatsResponse",
    "DashboardResponse",
]
