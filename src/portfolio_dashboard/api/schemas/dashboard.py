"""Pydantic schemas for dashboard endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from portfolio_dashboard.domain.models import CycleState, Exchange


class DerivedStockResponse(BaseModel):
    """One table row: a holding with its live and computed fields."""

    model_config = {"from_attributes": True}

    id: str
    particulars: str
    symbol: str
    exchange: Exchange
    sector: str
    purchase_price: Decimal
    quantity: int
    investment: Decimal
    portfolio_percentage: Decimal
    current_price: Decimal
    present_value: Decimal
    gain_loss: Decimal
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[str] = None
    price_is_estimated: bool = False


class SectorResponse(BaseModel):
    """Totals for one sector plus its member stocks."""

    model_config = {"from_attributes": True}

    sector: str
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    gain_loss_percent: Decimal
    stocks: list[DerivedStockResponse]


class SnapshotResponse(BaseModel):
    model_config = {"from_attributes": True}

    stocks: list[DerivedStockResponse]
    sectors: list[SectorResponse]
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    last_updated: datetime
    warnings: list[str]


class StatsResponse(BaseModel):
    """Headline figures for the summary cards."""

    model_config = {"from_attributes": True}

    total_stocks: int
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    total_return_percent: Decimal
    gainers: int
    losers: int
    unchanged: int


class DashboardResponse(BaseModel):
    """Everything the dashboard page renders in one payload."""

    state: CycleState
    is_refreshing: bool
    snapshot: Optional[SnapshotResponse] = None
    stats: StatsResponse
    warnings: list[str]
    error: Optional[str] = None
