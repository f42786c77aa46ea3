"""Read-side helpers for the dashboard: table sorting, sector view, stats."""

from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from portfolio_dashboard.domain.views import (
    DerivedStock,
    PortfolioSnapshot,
    PortfolioStats,
    SectorSummary,
)


class SortField(str, Enum):
    """Sortable table columns."""

    PARTICULARS = "particulars"
    SYMBOL = "symbol"
    SECTOR = "sector"
    EXCHANGE = "exchange"
    PURCHASE_PRICE = "purchase_price"
    QUANTITY = "quantity"
    INVESTMENT = "investment"
    PORTFOLIO_PERCENTAGE = "portfolio_percentage"
    CURRENT_PRICE = "current_price"
    PRESENT_VALUE = "present_value"
    GAIN_LOSS = "gain_loss"
    PE_RATIO = "pe_ratio"
    LATEST_EARNINGS = "latest_earnings"


def _sort_value(stock: DerivedStock, sort_by: SortField):
    value = getattr(stock, sort_by.value)
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value.lower()
    return value


def sort_stocks(
    stocks: Iterable[DerivedStock],
    sort_by: Optional[SortField] = None,
    descending: bool = False,
) -> list[DerivedStock]:
    """
    Sort table rows by one column.

    Missing values (e.g. a null P/E) always go last, whatever the direction.
    Without ``sort_by`` the original order is kept.
    """
    rows = list(stocks)
    if sort_by is None:
        return rows

    present = [s for s in rows if _sort_value(s, sort_by) is not None]
    missing = [s for s in rows if _sort_value(s, sort_by) is None]
    present.sort(key=lambda s: _sort_value(s, sort_by), reverse=descending)
    return present + missing


def sector_breakdown(snapshot: PortfolioSnapshot) -> list[SectorSummary]:
    """Sectors ordered by present value, largest first."""
    return sorted(snapshot.sectors, key=lambda s: s.total_present_value, reverse=True)


def portfolio_stats(stocks: Iterable[DerivedStock]) -> PortfolioStats:
    rows = list(stocks)
    if not rows:
        return PortfolioStats()

    total_investment = sum((s.investment for s in rows), Decimal("0"))
    total_present_value = sum((s.present_value for s in rows), Decimal("0"))
    total_gain_loss = total_present_value - total_investment
    return_percent = (
        total_gain_loss / total_investment * 100 if total_investment > 0 else Decimal("0")
    )

    return PortfolioStats(
        total_stocks=len(rows),
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_gain_loss,
        total_return_percent=return_percent,
        gainers=sum(1 for s in rows if s.gain_loss > 0),
        losers=sum(1 for s in rows if s.gain_loss < 0),
        unchanged=sum(1 for s in rows if s.gain_loss == 0),
    )
