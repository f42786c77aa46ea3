"""Application context: every long-lived service, built once per process.

The FastAPI lifespan starts it and closes it. Routers reach it through
``api.deps``. Tests can install their own context with ``set_app_context``
before the app starts.
"""

import asyncio
import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from portfolio_dashboard.config.settings import Settings, get_settings
from portfolio_dashboard.providers import (
    GoogleFinanceRatioProvider,
    QuoteProvider,
    RatioProvider,
    SyntheticMarketData,
    YahooQuoteProvider,
)
from portfolio_dashboard.repositories.sqlalchemy import (
    SqlAlchemyLocalStorage,
    get_session_factory,
    init_db,
)
from portfolio_dashboard.services import (
    PeriodicRefreshScheduler,
    PortfolioStore,
    PriceAdapter,
    RatioAdapter,
    RefreshOrchestrator,
    ResponseCache,
)

logger = logging.getLogger(__name__)

IN_PROCESS_BASE_URL = "http://portfolio-dashboard"


class AppContext:
    """
    Owns the store, response cache, adapters, orchestrator and scheduler.

    Construction is cheap and does no I/O. ``start`` opens the database and
    the adapters' HTTP client.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[sessionmaker] = None,
        quote_provider: Optional[QuoteProvider] = None,
        ratio_provider: Optional[RatioProvider] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._session_factory = session_factory
        self._client = client
        self._owns_client = client is None

        self.synthetic = SyntheticMarketData(seed=self.settings.synthetic_seed)
        self.quote_provider: QuoteProvider = quote_provider or YahooQuoteProvider()
        self.ratio_provider: RatioProvider = ratio_provider or GoogleFinanceRatioProvider(
            timeout=self.settings.ratio_timeout_seconds
        )
        self.cache = ResponseCache(ttl_seconds=self.settings.response_cache_ttl_seconds)

        self.store: Optional[PortfolioStore] = None
        self.orchestrator: Optional[RefreshOrchestrator] = None
        self.scheduler: Optional[PeriodicRefreshScheduler] = None
        self._load_task: Optional[asyncio.Task] = None

    @property
    def is_started(self) -> bool:
        return self.orchestrator is not None

    async def start(self, app: FastAPI) -> None:
        """Open storage and build the refresh pipeline against ``app``."""
        if self._session_factory is None:
            init_db()
            self._session_factory = get_session_factory()

        self.store = PortfolioStore(
            SqlAlchemyLocalStorage(self._session_factory),
            self.cache,
            storage_key=self.settings.storage_key,
        )

        if self._client is None:
            if self.settings.quote_api_base_url:
                self._client = httpx.AsyncClient(base_url=self.settings.quote_api_base_url)
            else:
                self._client = httpx.AsyncClient(
                    transport=httpx.ASGITransport(app=app),
                    base_url=IN_PROCESS_BASE_URL,
                )

        price_adapter = PriceAdapter(
            self._client, self.cache, timeout=self.settings.price_timeout_seconds
        )
        ratio_adapter = RatioAdapter(
            self._client, self.cache, timeout=self.settings.ratio_timeout_seconds
        )
        self.orchestrator = RefreshOrchestrator(self.store, price_adapter, ratio_adapter)
        self.scheduler = PeriodicRefreshScheduler(
            self.orchestrator, interval_seconds=self.settings.refresh_interval_seconds
        )
        logger.info(
            "App context started (quotes via %s)",
            self.settings.quote_api_base_url or "in-process endpoints",
        )

    def begin_initial_load(self) -> None:
        """Kick off the initial load without blocking startup."""
        self._load_task = asyncio.create_task(self.orchestrator.load(), name="initial-load")

    async def close(self) -> None:
        """Stop background work and release HTTP clients."""
        if self.scheduler is not None:
            await self.scheduler.stop()
        if self.orchestrator is not None:
            self.orchestrator.close()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
            try:
                await self._load_task
            except asyncio.CancelledError:
                pass
        self._load_task = None

        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        if isinstance(self.ratio_provider, GoogleFinanceRatioProvider):
            await self.ratio_provider.aclose()
        logger.info("App context closed")


# Global application context (one per process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
