"""
Portfolio aggregation: derive per-stock figures, sector groups and totals.

Pure functions only. Given the same holdings and live fields the result is
identical apart from ``last_updated``.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from portfolio_dashboard.core.timezone import now_market
from portfolio_dashboard.domain.models import Exchange, Holding
from portfolio_dashboard.domain.views import (
    DerivedStock,
    LiveFields,
    PortfolioSnapshot,
    SectorSummary,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

LiveFieldMap = Mapping[tuple[str, Exchange], LiveFields]


def derive_stock(holding: Holding, live: Optional[LiveFields] = None) -> DerivedStock:
    """
    Build the derived view of one holding.

    When no usable live price is available the purchase price stands in,
    so present value equals investment and gain/loss is zero.
    """
    investment = holding.investment
    live_price = live.current_price if live is not None else None
    if live_price is not None and live_price <= 0:
        live_price = None

    current_price = live_price if live_price is not None else holding.purchase_price
    present_value = current_price * holding.quantity

    return DerivedStock(
        id=holding.id,
        particulars=holding.particulars,
        sector=holding.sector,
        purchase_price=holding.purchase_price,
        quantity=holding.quantity,
        exchange=holding.exchange,
        symbol=holding.symbol,
        investment=investment,
        current_price=current_price,
        present_value=present_value,
        gain_loss=present_value - investment,
        pe_ratio=live.pe_ratio if live is not None else None,
        latest_earnings=live.earnings_label if live is not None else None,
        price_is_estimated=live_price is None or live.price_is_synthetic,
    )


def group_by_sector(stocks: Iterable[DerivedStock]) -> list[SectorSummary]:
    """Group stocks by exact sector label, in order of first appearance."""
    groups: dict[str, SectorSummary] = {}
    for stock in stocks:
        summary = groups.get(stock.sector)
        if summary is None:
            summary = SectorSummary(
                sector=stock.sector,
                total_investment=ZERO,
                total_present_value=ZERO,
                total_gain_loss=ZERO,
            )
            groups[stock.sector] = summary
        summary.stocks.append(stock)
        summary.total_investment += stock.investment
        summary.total_present_value += stock.present_value
        summary.total_gain_loss += stock.gain_loss
    return list(groups.values())


def aggregate(
    holdings: Iterable[Holding],
    live_fields: LiveFieldMap,
    warnings: Iterable[str] = (),
    as_of: Optional[datetime] = None,
) -> PortfolioSnapshot:
    """
    Combine holdings and live fields into a complete portfolio snapshot.

    Args:
        holdings: Holdings in display order.
        live_fields: Latest fetched fields keyed by (symbol, exchange).
            Missing entries fall back to purchase price.
        warnings: Warnings collected during the fetch that produced
            ``live_fields``; carried onto the snapshot as-is.
        as_of: Snapshot timestamp. Defaults to now in market time.
    """
    stocks = [derive_stock(h, live_fields.get(h.key)) for h in holdings]

    total_investment = sum((s.investment for s in stocks), ZERO)
    total_present_value = sum((s.present_value for s in stocks), ZERO)
    total_gain_loss = sum((s.gain_loss for s in stocks), ZERO)

    for stock in stocks:
        if total_investment > 0:
            stock.portfolio_percentage = stock.investment / total_investment * HUNDRED
        else:
            stock.portfolio_percentage = ZERO

    return PortfolioSnapshot(
        stocks=stocks,
        sectors=group_by_sector(stocks),
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_gain_loss,
        last_updated=as_of or now_market(),
        warnings=list(warnings),
    )
