"""
Unit tests for the portfolio aggregator.

Tests cover:
- Derived stock figures and purchase-price fallback
- Portfolio percentages (sum to 100, zero-investment guard)
- Sector grouping and totals
- Determinism apart from the timestamp
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from portfolio_dashboard.domain.models import Exchange
from portfolio_dashboard.domain.views import LiveFields
from portfolio_dashboard.services.portfolio_aggregator import (
    aggregate,
    derive_stock,
    group_by_sector,
)

from tests.conftest import make_holding, market_datetime


@pytest.fixture
def holdings():
    return [
        make_holding("TCS", "3200", 10, sector="Technology"),
        make_holding("HDFCBANK", "1600", 12, sector="Financials"),
        make_holding("INFY", "1400", 15, sector="Technology"),
    ]


@pytest.fixture
def live():
    return {
        ("TCS", Exchange.NSE): LiveFields(
            current_price=Decimal("3300"), pe_ratio=Decimal("29.5"), earnings_label="₹128.40 (TTM)"
        ),
        ("HDFCBANK", Exchange.NSE): LiveFields(current_price=Decimal("1550")),
        ("INFY", Exchange.NSE): LiveFields(current_price=Decimal("1500"), price_is_synthetic=True),
    }


# =============================================================================
# DERIVED STOCK TESTS
# =============================================================================


class TestDeriveStock:
    """Tests for a single holding's derived figures."""

    def test_live_price_drives_present_value_and_gain(self):
        """
        GIVEN TCS bought at 3200 x 10 and a live price of 3300
        WHEN I derive the stock
        THEN investment=32000, present value=33000, gain/loss=1000
        """
        stock = derive_stock(
            make_holding("TCS", "3200", 10),
            LiveFields(current_price=Decimal("3300")),
        )

        assert stock.investment == Decimal("32000")
        assert stock.current_price == Decimal("3300")
        assert stock.present_value == Decimal("33000")
        assert stock.gain_loss == Decimal("1000")
        assert stock.price_is_estimated is False

    def test_missing_live_data_falls_back_to_purchase_price(self):
        """
        GIVEN no live fields for a holding
        WHEN I derive the stock
        THEN current price is the purchase price, gain/loss is 0 and ratios are None
        """
        stock = derive_stock(make_holding("TCS", "3200", 10), None)

        assert stock.current_price == Decimal("3200")
        assert stock.present_value == stock.investment
        assert stock.gain_loss == Decimal("0")
        assert stock.pe_ratio is None
        assert stock.latest_earnings is None
        assert stock.price_is_estimated is True

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-5")])
    def test_non_positive_price_is_unusable(self, price):
        """
        GIVEN a live price of zero or below
        WHEN I derive the stock
        THEN the purchase price is used instead
        """
        stock = derive_stock(make_holding("TCS", "3200", 10), LiveFields(current_price=price))

        assert stock.current_price == Decimal("3200")
        assert stock.gain_loss == Decimal("0")
        assert stock.price_is_estimated is True

    def test_ratios_pass_through_without_price(self):
        """
        GIVEN live ratios but no price
        WHEN I derive the stock
        THEN P/E and earnings are kept and price falls back
        """
        stock = derive_stock(
            make_holding("TCS", "3200", 10),
            LiveFields(pe_ratio=Decimal("29.5"), earnings_label="₹128.40 (TTM)"),
        )

        assert stock.pe_ratio == Decimal("29.5")
        assert stock.latest_earnings == "₹128.40 (TTM)"
        assert stock.current_price == Decimal("3200")

    def test_synthetic_price_is_marked_estimated(self):
        stock = derive_stock(
            make_holding("TCS", "3200", 10),
            LiveFields(current_price=Decimal("500"), price_is_synthetic=True),
        )

        assert stock.current_price == Decimal("500")
        assert stock.price_is_estimated is True


# =============================================================================
# AGGREGATE TESTS
# =============================================================================


class TestAggregate:
    """Tests for the full snapshot computation."""

    def test_percentages_sum_to_100(self, holdings, live):
        """
        GIVEN a non-empty set of holdings
        WHEN I aggregate
        THEN the portfolio percentages sum to 100
        """
        snapshot = aggregate(holdings, live)

        total = sum(s.portfolio_percentage for s in snapshot.stocks)
        assert abs(total - Decimal("100")) < Decimal("1e-20")

    def test_percentage_is_share_of_investment(self, holdings, live):
        snapshot = aggregate(holdings, live)

        # 32000 / (32000 + 19200 + 21000)
        tcs = snapshot.stocks[0]
        assert tcs.portfolio_percentage == Decimal("32000") / Decimal("72200") * 100

    def test_zero_total_investment_gives_zero_percentages(self):
        """
        GIVEN holdings whose total investment is 0
        WHEN I aggregate
        THEN every percentage is 0 and nothing divides by zero
        """
        free = [
            replace(make_holding("TCS"), purchase_price=Decimal("0")),
            replace(make_holding("INFY"), purchase_price=Decimal("0")),
        ]

        snapshot = aggregate(free, {})

        assert snapshot.total_investment == Decimal("0")
        assert all(s.portfolio_percentage == Decimal("0") for s in snapshot.stocks)

    def test_grand_totals(self, holdings, live):
        snapshot = aggregate(holdings, live)

        assert snapshot.total_investment == Decimal("72200")
        # 33000 + 18600 + 22500
        assert snapshot.total_present_value == Decimal("74100")
        assert snapshot.total_gain_loss == Decimal("1900")
        assert snapshot.total_gain_loss == snapshot.total_present_value - snapshot.total_investment

    def test_empty_holdings(self):
        snapshot = aggregate([], {})

        assert snapshot.stocks == []
        assert snapshot.sectors == []
        assert snapshot.total_investment == Decimal("0")
        assert snapshot.total_gain_loss == Decimal("0")

    def test_stock_order_follows_holdings(self, holdings, live):
        snapshot = aggregate(holdings, live)

        assert [s.symbol for s in snapshot.stocks] == ["TCS", "HDFCBANK", "INFY"]

    def test_same_inputs_same_snapshot_apart_from_timestamp(self, holdings, live):
        """
        GIVEN identical holdings and live fields
        WHEN I aggregate twice at different times
        THEN the snapshots differ only in last_updated
        """
        first = aggregate(holdings, live, as_of=market_datetime(2024, 6, 14, 10))
        second = aggregate(holdings, live, as_of=market_datetime(2024, 6, 14, 11))

        assert first.last_updated != second.last_updated
        second.last_updated = first.last_updated
        assert first == second

    def test_does_not_mutate_inputs(self, holdings, live):
        before = [replace(h) for h in holdings]

        aggregate(holdings, live)

        assert holdings == before

    def test_warnings_carried_on_snapshot(self, holdings, live):
        snapshot = aggregate(holdings, live, warnings=["TCS: Network error: timed out"])

        assert snapshot.warnings == ["TCS: Network error: timed out"]

    def test_same_symbol_on_two_exchanges_kept_apart(self):
        nse = make_holding("TCS", "3200", 10, exchange=Exchange.NSE)
        bse = make_holding("TCS", "3100", 5, exchange=Exchange.BSE)
        live = {
            ("TCS", Exchange.NSE): LiveFields(current_price=Decimal("3300")),
            ("TCS", Exchange.BSE): LiveFields(current_price=Decimal("3290")),
        }

        snapshot = aggregate([nse, bse], live)

        assert [s.current_price for s in snapshot.stocks] == [Decimal("3300"), Decimal("3290")]


# =============================================================================
# SECTOR GROUPING TESTS
# =============================================================================


class TestSectorGrouping:
    """Tests for sector grouping and totals."""

    def test_sectors_in_first_seen_order(self, holdings, live):
        snapshot = aggregate(holdings, live)

        assert [s.sector for s in snapshot.sectors] == ["Technology", "Financials"]
        assert [s.symbol for s in snapshot.sectors[0].stocks] == ["TCS", "INFY"]

    def test_sector_totals_equal_member_sums(self, holdings, live):
        """
        GIVEN stocks spread over several sectors
        WHEN I aggregate
        THEN every sector's totals equal the sums over its members
        """
        snapshot = aggregate(holdings, live)

        for sector in snapshot.sectors:
            assert sector.total_gain_loss == sum(s.gain_loss for s in sector.stocks)
            assert sector.total_investment == sum(s.investment for s in sector.stocks)
            assert sector.total_present_value == sum(s.present_value for s in sector.stocks)

    def test_sector_labels_are_exact(self):
        stocks = aggregate(
            [
                make_holding("TCS", sector="Technology"),
                make_holding("INFY", sector="technology"),
            ],
            {},
        ).stocks

        assert len(group_by_sector(stocks)) == 2

    def test_gain_loss_percent(self, holdings, live):
        snapshot = aggregate(holdings, live)

        financials = snapshot.sectors[1]
        # (18600 - 19200) / 19200 * 100
        assert financials.gain_loss_percent == Decimal("-600") / Decimal("19200") * 100
