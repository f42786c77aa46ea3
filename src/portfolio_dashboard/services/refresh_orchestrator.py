"""
Refresh orchestrator: drives fetch cycles and owns the published snapshot.

Two kinds of cycle exist. A full cycle (initial load, manual refresh, or
after an add/update) reads the store and fetches both price and ratios for
every holding. A price cycle (periodic tick) re-fetches prices only for the
holdings in the current snapshot. Cycles never overlap: manual refreshes
wait their turn on the cycle lock, periodic ticks are dropped.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol

from portfolio_dashboard.core.exceptions import StorageUnavailableError
from portfolio_dashboard.domain.models import (
    CycleState,
    Exchange,
    Holding,
    HoldingCreate,
    HoldingUpdate,
)
from portfolio_dashboard.domain.views import LiveFields, PortfolioSnapshot, PriceQuote, RatioQuote
from portfolio_dashboard.services.holding_store import PortfolioStore
from portfolio_dashboard.services.portfolio_aggregator import aggregate

logger = logging.getLogger(__name__)

GENERIC_CYCLE_ERROR = (
    "Failed to fetch portfolio data. Please check your internet connection and try again."
)
PRICE_FAILED = "Failed to fetch current price"
RATIOS_FAILED = "Failed to fetch P/E ratio and earnings"
PRICE_REFRESH_FAILED = "Failed to refresh price data"


class PriceSource(Protocol):
    async def fetch(self, symbol: str, exchange: Exchange = Exchange.NSE) -> PriceQuote:
        ...


class RatioSource(Protocol):
    async def fetch(self, symbol: str) -> RatioQuote:
        ...


def dedupe(warnings: list[str]) -> list[str]:
    """Drop repeated warnings, keeping first-seen order."""
    return list(dict.fromkeys(warnings))


@dataclass
class _CycleResult:
    live: dict[tuple[str, Exchange], LiveFields] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    failed: bool = False

    def warn(self, symbol: str, message: str) -> None:
        self.warnings.append(f"{symbol}: {message}")


class RefreshOrchestrator:
    """Single owner of dashboard state: cycle state, snapshot, warnings, error."""

    def __init__(
        self,
        store: PortfolioStore,
        price_adapter: PriceSource,
        ratio_adapter: RatioSource,
    ):
        self._store = store
        self._price_adapter = price_adapter
        self._ratio_adapter = ratio_adapter

        self._cycle_lock = asyncio.Lock()
        self._pending = 0
        self._generation = 0
        self._closed = False

        self._state = CycleState.IDLE
        self._snapshot: Optional[PortfolioSnapshot] = None
        self._holdings: list[Holding] = []
        self._live: dict[tuple[str, Exchange], LiveFields] = {}
        self._warnings: list[str] = []
        self._error: Optional[str] = None

    # ==================== Observed state ====================

    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def snapshot(self) -> Optional[PortfolioSnapshot]:
        return self._snapshot

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def in_flight(self) -> bool:
        """True while any cycle is running or waiting to run."""
        return self._pending > 0 or self._cycle_lock.locked()

    # ==================== Cycles ====================

    async def load(self) -> CycleState:
        """Initial load: full fetch of every stored holding."""
        await self._run_full_cycle()
        return self._state

    async def refresh(self) -> CycleState:
        """Manual refresh. Clears stale warnings and any error before fetching."""
        self._warnings = []
        self._error = None
        await self._run_full_cycle()
        return self._state

    async def tick(self) -> bool:
        """
        Periodic price-only refresh.

        Returns False without fetching when there is nothing to refresh or
        another cycle is in flight. A fatal error also suppresses ticks
        until a manual refresh or dismissal clears it.
        """
        if self._closed or self.in_flight or self._snapshot is None or not self._holdings:
            return False
        if self._state == CycleState.ERROR:
            return False

        self._pending += 1
        try:
            async with self._cycle_lock:
                await self._price_cycle()
        finally:
            self._pending -= 1
        return True

    async def _run_full_cycle(self) -> None:
        self._pending += 1
        try:
            async with self._cycle_lock:
                await self._full_cycle()
        finally:
            self._pending -= 1

    async def _full_cycle(self) -> None:
        self._state = CycleState.FETCHING
        try:
            holdings = self._store.list_holdings()
            if not holdings:
                self._publish_empty()
                return

            generation = self._generation
            result = await self._fetch_all(holdings)
            if generation != self._generation:
                # Holdings changed while fetching; publish what is stored now
                holdings = self._store.list_holdings()
        except StorageUnavailableError as exc:
            logger.error("Unable to read holdings: %s", exc.message, exc_info=True)
            self._fail(exc.message)
            return
        except Exception:
            logger.exception("Refresh cycle failed")
            self._fail(GENERIC_CYCLE_ERROR)
            return

        if self._closed:
            logger.debug("Discarding cycle result after shutdown")
            return
        if not holdings:
            self._publish_empty()
            return

        self._live = {**self._live, **result.live}
        self._publish(holdings, result)

    async def _price_cycle(self) -> None:
        self._state = CycleState.FETCHING
        holdings = list(self._holdings)
        results = await asyncio.gather(
            *(self._price_adapter.fetch(h.symbol, h.exchange) for h in holdings),
            return_exceptions=True,
        )
        if self._closed:
            logger.debug("Discarding price refresh after shutdown")
            return

        result = _CycleResult(live=dict(self._live))
        for holding, quote in zip(holdings, results):
            if isinstance(quote, BaseException):
                logger.warning("Price refresh raised for %s: %r", holding.symbol, quote)
                result.warn(holding.symbol, PRICE_REFRESH_FAILED)
                result.failed = True
                continue
            if quote.warning:
                result.warn(holding.symbol, quote.warning)
            price = quote.usable_price
            if price is None:
                # Keep the last known price rather than dropping to cost basis
                continue
            previous = result.live.get(holding.key, LiveFields())
            result.live[holding.key] = replace(
                previous, current_price=price, price_is_synthetic=quote.is_synthetic
            )

        self._live = result.live
        if not self._holdings:
            self._publish_empty()
            return
        # Aggregate whatever is held now; removals may have landed mid-cycle
        self._publish(self._holdings, result)

    async def _fetch_all(self, holdings: list[Holding]) -> _CycleResult:
        count = len(holdings)
        settled = await asyncio.gather(
            *(self._price_adapter.fetch(h.symbol, h.exchange) for h in holdings),
            *(self._ratio_adapter.fetch(h.symbol) for h in holdings),
            return_exceptions=True,
        )
        prices, ratios = settled[:count], settled[count:]

        result = _CycleResult()
        for holding, price, ratio in zip(holdings, prices, ratios):
            live = LiveFields()

            if isinstance(price, BaseException):
                logger.warning("Price fetch raised for %s: %r", holding.symbol, price)
                result.warn(holding.symbol, PRICE_FAILED)
                result.failed = True
            else:
                live.current_price = price.usable_price
                live.price_is_synthetic = price.is_synthetic
                if price.warning:
                    result.warn(holding.symbol, price.warning)

            if isinstance(ratio, BaseException):
                logger.warning("Ratio fetch raised for %s: %r", holding.symbol, ratio)
                result.warn(holding.symbol, RATIOS_FAILED)
                result.failed = True
            else:
                live.pe_ratio = ratio.pe_ratio
                live.earnings_label = ratio.earnings_label
                if ratio.warning:
                    result.warn(holding.symbol, ratio.warning)

            result.live[holding.key] = live
        return result

    # ==================== Commands ====================

    async def add_holding(self, data: HoldingCreate) -> Holding:
        """Add a holding, then run a full cycle so it shows live data."""
        holding = self._store.add_holding(data)
        self._generation += 1
        await self.refresh()
        return holding

    async def update_holding(self, holding_id: str, patch: HoldingUpdate) -> Holding:
        holding = self._store.update_holding(holding_id, patch)
        self._generation += 1
        await self.refresh()
        return holding

    def remove_holding(self, holding_id: str) -> None:
        """
        Remove a holding and re-aggregate from the last fetched data.

        No fetch is started. Removing the last holding moves to EMPTY.
        """
        self._store.remove_holding(holding_id)
        self._generation += 1
        self._warnings = []
        self._error = None

        if self._snapshot is None:
            return

        self._holdings = [h for h in self._holdings if h.id != holding_id]
        if not self._holdings:
            self._publish_empty()
            return
        self._prune_live()
        self._snapshot = aggregate(self._holdings, self._live)

    def clear_portfolio(self) -> None:
        self._store.clear()
        self._generation += 1
        self._warnings = []
        self._error = None
        self._live = {}
        self._publish_empty()

    def dismiss_warnings(self) -> None:
        self._warnings = []
        if self._snapshot is not None:
            self._snapshot = replace(self._snapshot, warnings=[])

    def dismiss_error(self) -> None:
        self._error = None
        if self._state == CycleState.ERROR:
            self._state = CycleState.IDLE

    def close(self) -> None:
        """Stop publishing; results of cycles still in flight are discarded."""
        self._closed = True

    # ==================== Publishing ====================

    def _publish(self, holdings: list[Holding], result: _CycleResult) -> None:
        self._warnings = dedupe(result.warnings)
        self._holdings = list(holdings)
        self._prune_live()
        self._snapshot = aggregate(holdings, self._live, self._warnings)
        self._error = None
        self._state = CycleState.PARTIAL_FAILURE if result.failed else CycleState.SUCCESS
        logger.info(
            "Refresh cycle finished: %d holdings, %d warnings, state=%s",
            len(holdings),
            len(self._warnings),
            self._state.value,
        )

    def _prune_live(self) -> None:
        keys = {h.key for h in self._holdings}
        self._live = {k: v for k, v in self._live.items() if k in keys}

    def _publish_empty(self) -> None:
        self._holdings = []
        self._live = {}
        self._snapshot = aggregate([], {})
        self._state = CycleState.EMPTY

    def _fail(self, message: str) -> None:
        self._error = message
        self._state = CycleState.ERROR
