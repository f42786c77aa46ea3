"""Pydantic schemas for holding endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from portfolio_dashboard.domain.models import Exchange


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Ticker symbol, e.g. TCS")
    particulars: str = Field(..., min_length=1, max_length=200, description="Company name")
    sector: str = Field(..., min_length=1, max_length=100)
    purchase_price: Decimal = Field(..., gt=0, description="Price paid per share")
    quantity: int = Field(..., gt=0)
    exchange: Exchange = Exchange.NSE

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class HoldingUpdateRequest(BaseModel):
    """Request schema for editing a holding (partial update)."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=20)
    particulars: Optional[str] = Field(default=None, min_length=1, max_length=200)
    sector: Optional[str] = Field(default=None, min_length=1, max_length=100)
    purchase_price: Optional[Decimal] = Field(default=None, gt=0)
    quantity: Optional[int] = Field(default=None, gt=0)
    exchange: Optional[Exchange] = None

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    particulars: str
    sector: str
    exchange: Exchange
    purchase_price: Decimal
    quantity: int
    investment: Decimal


class CatalogEntryResponse(BaseModel):
    """One entry of the add-stock catalogue."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    sector: str
