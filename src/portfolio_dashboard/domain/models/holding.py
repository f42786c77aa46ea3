"""Holding domain model."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from portfolio_dashboard.domain.models.enums import Exchange


@dataclass
class Holding:
    """
    A user-entered stake in one symbol/exchange pair with its cost basis.

    The (symbol, exchange) pair is unique across a portfolio.
    """

    id: str
    particulars: str
    sector: str
    purchase_price: Decimal
    quantity: int
    exchange: Exchange
    symbol: str

    def __post_init__(self) -> None:
        if isinstance(self.exchange, str):
            self.exchange = Exchange(self.exchange)

    @property
    def investment(self) -> Decimal:
        """Cost basis: purchase price x quantity."""
        return self.purchase_price * self.quantity

    @property
    def key(self) -> tuple[str, Exchange]:
        return (self.symbol, self.exchange)


@dataclass
class HoldingCreate:
    """Input data for adding a holding."""

    symbol: str
    particulars: str
    sector: str
    purchase_price: Decimal
    quantity: int
    exchange: Exchange = Exchange.NSE


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    symbol: Optional[str] = None
    particulars: Optional[str] = None
    sector: Optional[str] = None
    purchase_price: Optional[Decimal] = None
    quantity: Optional[int] = None
    exchange: Optional[Exchange] = None
