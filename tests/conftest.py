"""
Pytest configuration and fixtures for portfolio dashboard tests.

This module provides:
- In-memory SQLite storage fixtures
- A controllable clock for the response cache
- Counting fake adapters for orchestrator tests
- Deterministic upstream providers for API tests
- Holding factory helpers
"""

import asyncio
import itertools
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from portfolio_dashboard.app_context import AppContext, set_app_context
from portfolio_dashboard.config.settings import Settings, reset_settings
from portfolio_dashboard.core.timezone import MARKET_TZ
from portfolio_dashboard.domain.models import Exchange, Holding, HoldingCreate
from portfolio_dashboard.domain.views import MarketQuote, PriceQuote, RatioQuote, ScrapedRatios
from portfolio_dashboard.providers import ProviderError
from portfolio_dashboard.repositories.sqlalchemy import Base, SqlAlchemyLocalStorage
# Import ORM models to register them with Base before creating tables
from portfolio_dashboard.repositories.sqlalchemy import orm_models  # noqa: F401
from portfolio_dashboard.services import PortfolioStore, ResponseCache


# =============================================================================
# TIME HELPERS
# =============================================================================


def market_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Kolkata."""
    return MARKET_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return market_datetime(2024, 6, 14, 14, 30, 0)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def storage(session_factory) -> SqlAlchemyLocalStorage:
    """Provide test LocalStorage."""
    return SqlAlchemyLocalStorage(session_factory)


@pytest.fixture
def response_cache(fake_clock) -> ResponseCache:
    return ResponseCache(ttl_seconds=10.0, clock=fake_clock)


def sequential_ids(prefix: str = "h") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def store(storage, response_cache) -> PortfolioStore:
    """Provide a PortfolioStore with predictable ids (h1, h2, ...)."""
    return PortfolioStore(storage, response_cache, id_factory=sequential_ids())


@pytest.fixture
def empty_store(store) -> PortfolioStore:
    """A store holding an explicitly empty portfolio (no sample fallback)."""
    store.clear()
    return store


# =============================================================================
# HOLDING HELPERS
# =============================================================================


def make_holding(
    symbol: str = "TCS",
    purchase_price: Union[str, Decimal] = "3200",
    quantity: int = 10,
    sector: str = "Technology",
    exchange: Exchange = Exchange.NSE,
    holding_id: Optional[str] = None,
    particulars: Optional[str] = None,
) -> Holding:
    return Holding(
        id=holding_id or f"{symbol.lower()}-{exchange.value.lower()}",
        particulars=particulars or f"{symbol} Limited",
        sector=sector,
        purchase_price=Decimal(str(purchase_price)),
        quantity=quantity,
        exchange=exchange,
        symbol=symbol,
    )


def make_create(
    symbol: str = "TCS",
    purchase_price: Union[str, Decimal] = "3200",
    quantity: int = 10,
    sector: str = "Technology",
    exchange: Exchange = Exchange.NSE,
    particulars: Optional[str] = None,
) -> HoldingCreate:
    return HoldingCreate(
        symbol=symbol,
        particulars=particulars or f"{symbol} Limited",
        sector=sector,
        purchase_price=Decimal(str(purchase_price)),
        quantity=quantity,
        exchange=exchange,
    )


async def wait_until(predicate: Callable[[], bool], attempts: int = 200) -> None:
    """Yield to the event loop until predicate() holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


# =============================================================================
# FAKE ADAPTERS (orchestrator tests)
# =============================================================================


PriceOutcome = Union[Decimal, PriceQuote, Exception]
RatioOutcome = Union[RatioQuote, Exception]


class FakePriceAdapter:
    """
    Price adapter with scripted outcomes per symbol.

    An outcome can be a Decimal price, a full PriceQuote, or an exception
    to raise. Unknown symbols get a transport-failure fallback. Optionally
    blocks on ``gate`` so tests can hold a cycle in flight.
    """

    def __init__(
        self,
        outcomes: Optional[dict[str, PriceOutcome]] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.outcomes = dict(outcomes or {})
        self.gate = gate
        self.calls: list[tuple[str, Exchange]] = []

    async def fetch(self, symbol: str, exchange: Exchange = Exchange.NSE) -> PriceQuote:
        self.calls.append((symbol, exchange))
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.get(symbol)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, PriceQuote):
            return outcome
        if outcome is None:
            return price_fallback(symbol, "Network error: timed out")
        return PriceQuote(
            symbol=symbol,
            price=outcome,
            change=Decimal("0"),
            change_percent=Decimal("0"),
            as_of=market_datetime(2024, 6, 14),
        )


class FakeRatioAdapter:
    """Ratio adapter with scripted outcomes per symbol; unknown symbols fail soft."""

    def __init__(
        self,
        outcomes: Optional[dict[str, RatioOutcome]] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.outcomes = dict(outcomes or {})
        self.gate = gate
        self.calls: list[str] = []

    async def fetch(self, symbol: str) -> RatioQuote:
        self.calls.append(symbol)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.get(symbol)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return ratio_fallback(symbol, "Scraping failed: timed out")
        return outcome


def price_fallback(symbol: str, warning: str) -> PriceQuote:
    return PriceQuote(
        symbol=symbol,
        price=None,
        change=Decimal("0"),
        change_percent=Decimal("0"),
        as_of=market_datetime(2024, 6, 14),
        is_synthetic=True,
        warning=warning,
    )


def ratio_fallback(symbol: str, warning: str) -> RatioQuote:
    return RatioQuote(
        symbol=symbol,
        pe_ratio=None,
        earnings_label=None,
        as_of=market_datetime(2024, 6, 14),
        is_synthetic=True,
        warning=warning,
    )


def ratio_quote(symbol: str, pe: str, earnings: Optional[str] = None) -> RatioQuote:
    return RatioQuote(
        symbol=symbol,
        pe_ratio=Decimal(pe),
        earnings_label=earnings,
        as_of=market_datetime(2024, 6, 14),
    )


# =============================================================================
# UPSTREAM PROVIDERS (endpoint tests)
# =============================================================================


class DeterministicQuoteProvider:
    """Quote provider with fixed prices and no randomness."""

    FIXED_PRICES = {
        "TCS": (3300.0, 3280.0),
        "INFY": (1500.0, 1510.0),
        "HDFCBANK": (1600.0, 1600.0),
        "RELIANCE": (2500.0, 2450.0),
    }

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    async def get_quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        self.calls.append((symbol, exchange_code))
        if symbol not in self.FIXED_PRICES:
            raise ProviderError(f"No data found for symbol: {symbol}.{exchange_code}")
        price, previous_close = self.FIXED_PRICES[symbol]
        change = price - previous_close
        return MarketQuote(
            symbol=symbol,
            ticker=f"{symbol}.{exchange_code}",
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=change / previous_close * 100,
            pe_ratio=25.0,
            market_cap=1.2e13,
            day_range=f"{previous_close:.2f} - {price:.2f}",
            volume=100000,
        )


class DeterministicRatioProvider:
    """Ratio provider with fixed ratios; unknown symbols have nothing on the page."""

    FIXED_RATIOS = {
        "TCS": ScrapedRatios(pe_ratio=29.5, earnings="₹128.40 (TTM)"),
        "INFY": ScrapedRatios(pe_ratio=24.1, earnings="₹62.10 (TTM)"),
    }

    def __init__(self):
        self.calls: list[str] = []

    async def get_ratios(self, symbol: str) -> ScrapedRatios:
        self.calls.append(symbol)
        return self.FIXED_RATIOS.get(symbol, ScrapedRatios())


class FailingQuoteProvider:
    async def get_quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        raise ConnectionError("Network unavailable")


class FailingRatioProvider:
    async def get_ratios(self, symbol: str) -> ScrapedRatios:
        raise ProviderError("Google Finance HTTP 503: Service Unavailable")


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests: no background timer, seeded synthetic data."""
    return Settings(auto_refresh_enabled=False, synthetic_seed=42)


def client_for(context: AppContext):
    from portfolio_dashboard.main import app

    set_app_context(context)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        set_app_context(None)
        reset_settings()


@pytest.fixture
def app_context(test_settings, session_factory) -> AppContext:
    return AppContext(
        settings=test_settings,
        session_factory=session_factory,
        quote_provider=DeterministicQuoteProvider(),
        ratio_provider=DeterministicRatioProvider(),
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client backed by deterministic providers."""
    yield from client_for(app_context)


@pytest.fixture
def failing_context(test_settings, session_factory) -> AppContext:
    return AppContext(
        settings=test_settings,
        session_factory=session_factory,
        quote_provider=FailingQuoteProvider(),
        ratio_provider=FailingRatioProvider(),
    )


@pytest.fixture
def failing_client(failing_context) -> TestClient:
    """Provide FastAPI test client whose upstream sources always fail."""
    yield from client_for(failing_context)
