"""View models for live market data and computed portfolio snapshots."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from portfolio_dashboard.domain.models import Exchange


@dataclass
class PriceQuote:
    """Result of one Price Adapter fetch."""

    symbol: str
    price: Optional[Decimal]
    change: Decimal
    change_percent: Decimal
    as_of: datetime
    is_synthetic: bool = False
    warning: Optional[str] = None

    @property
    def usable_price(self) -> Optional[Decimal]:
        """Price if it can be used as a current market price, else None."""
        if self.price is None or not self.price.is_finite() or self.price <= 0:
            return None
        return self.price


@dataclass
class RatioQuote:
    """Result of one Ratio Adapter fetch."""

    symbol: str
    pe_ratio: Optional[Decimal]
    earnings_label: Optional[str]
    as_of: datetime
    is_synthetic: bool = False
    warning: Optional[str] = None


@dataclass
class LiveFields:
    """Fetched market fields for one (symbol, exchange) pair."""

    current_price: Optional[Decimal] = None
    price_is_synthetic: bool = False
    pe_ratio: Optional[Decimal] = None
    earnings_label: Optional[str] = None


@dataclass
class DerivedStock:
    """A holding enriched with the latest fetched and computed market fields."""

    id: str
    particulars: str
    sector: str
    purchase_price: Decimal
    quantity: int
    exchange: Exchange
    symbol: str
    investment: Decimal
    current_price: Decimal
    present_value: Decimal
    gain_loss: Decimal
    portfolio_percentage: Decimal = field(default_factory=lambda: Decimal("0"))
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[str] = None
    price_is_estimated: bool = False


@dataclass
class SectorSummary:
    """Totals for all stocks sharing a sector label."""

    sector: str
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    stocks: list[DerivedStock] = field(default_factory=list)

    @property
    def gain_loss_percent(self) -> Decimal:
        if self.total_investment == 0:
            return Decimal("0")
        return self.total_gain_loss / self.total_investment * 100


@dataclass
class PortfolioSnapshot:
    """
    Complete, internally consistent view of the portfolio at one point in time.

    Recomputed wholesale every cycle; never partially updated.
    """

    stocks: list[DerivedStock]
    sectors: list[SectorSummary]
    total_investment: Decimal
    total_present_value: Decimal
    total_gain_loss: Decimal
    last_updated: datetime
    warnings: list[str] = field(default_factory=list)


@dataclass
class PortfolioStats:
    """Headline figures for the summary cards."""

    total_stocks: int = 0
    total_investment: Decimal = field(default_factory=lambda: Decimal("0"))
    total_present_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    gainers: int = 0
    losers: int = 0
    unchanged: int = 0


@dataclass
class MarketQuote:
    """Raw quote as reported by the upstream price source."""

    symbol: str
    ticker: str
    price: float
    previous_close: float
    change: float
    change_percent: float
    pe_ratio: Optional[float] = None
    market_cap: Optional[float] = None
    day_range: Optional[str] = None
    volume: int = 0


@dataclass
class ScrapedRatios:
    """Best-effort ratio fields extracted from the upstream quote page."""

    pe_ratio: Optional[float] = None
    earnings: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.pe_ratio is not None or self.earnings is not None
