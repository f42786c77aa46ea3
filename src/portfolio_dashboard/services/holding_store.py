"""Portfolio store: the user's holdings list, persisted as one JSON array."""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError

from portfolio_dashboard.core.exceptions import (
    DuplicateHoldingError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from portfolio_dashboard.domain.models import (
    Exchange,
    Holding,
    HoldingCreate,
    HoldingUpdate,
    SAMPLE_HOLDINGS,
)
from portfolio_dashboard.repositories.protocols import LocalStorage
from portfolio_dashboard.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "portfolio_stocks"


class StoredHolding(BaseModel):
    """Persisted layout of one holding (camelCase keys, no derived fields)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    particulars: str
    sector: str
    purchase_price: Decimal = Field(alias="purchasePrice", gt=0)
    quantity: int = Field(gt=0)
    exchange: Exchange
    symbol: str = Field(min_length=1)

    @classmethod
    def from_domain(cls, holding: Holding) -> "StoredHolding":
        return cls(
            id=holding.id,
            particulars=holding.particulars,
            sector=holding.sector,
            purchase_price=holding.purchase_price,
            quantity=holding.quantity,
            exchange=holding.exchange,
            symbol=holding.symbol,
        )

    def to_domain(self) -> Holding:
        return Holding(
            id=self.id,
            particulars=self.particulars,
            sector=self.sector,
            purchase_price=self.purchase_price,
            quantity=self.quantity,
            exchange=self.exchange,
            symbol=self.symbol,
        )


_HOLDINGS_ADAPTER = TypeAdapter(list[StoredHolding])


def _require_text(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


def _require_price(value) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError("Purchase price is required")
    price = Decimal(str(value))
    if not price.is_finite() or price <= 0:
        raise ValidationError("Purchase price must be a positive number")
    return price


def _require_quantity(value) -> int:
    if value is None:
        raise ValidationError("Quantity is required")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError("Quantity must be a positive integer")
    return value


class PortfolioStore:
    """
    Holds the user's holdings in insertion order.

    Every mutating call writes the full list to local storage and clears
    the shared provider response cache before returning.
    """

    def __init__(
        self,
        storage: LocalStorage,
        cache: ResponseCache,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._storage = storage
        self._cache = cache
        self._storage_key = storage_key
        self._id_factory = id_factory

    def list_holdings(self) -> list[Holding]:
        """
        Return current holdings in insertion order.

        Falls back to the sample portfolio when nothing (or nothing valid)
        has been persisted. Raises StorageUnavailableError if storage
        cannot be read at all.
        """
        try:
            raw = self._storage.get_item(self._storage_key)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Unable to read saved holdings: {exc}") from exc

        if raw is None:
            return [replace(h) for h in SAMPLE_HOLDINGS]

        try:
            stored = _HOLDINGS_ADAPTER.validate_json(raw)
        except SchemaError as exc:
            logger.warning(
                "Saved holdings under %r are invalid, using sample portfolio: %s",
                self._storage_key,
                exc.error_count(),
            )
            return [replace(h) for h in SAMPLE_HOLDINGS]

        return [s.to_domain() for s in stored]

    def add_holding(self, data: HoldingCreate) -> Holding:
        """Validate and append a new holding; raises DuplicateHoldingError on a repeated pair."""
        symbol = _require_text(data.symbol, "Stock symbol is required").upper()
        particulars = _require_text(data.particulars, "Company name is required")
        sector = _require_text(data.sector, "Sector is required")
        price = _require_price(data.purchase_price)
        quantity = _require_quantity(data.quantity)
        exchange = Exchange(data.exchange)

        holdings = self.list_holdings()
        if any(h.key == (symbol, exchange) for h in holdings):
            raise DuplicateHoldingError(symbol, exchange.value)

        holding = Holding(
            id=self._id_factory(),
            particulars=particulars,
            sector=sector,
            purchase_price=price,
            quantity=quantity,
            exchange=exchange,
            symbol=symbol,
        )
        holdings.append(holding)
        self._save(holdings)
        logger.info("Added holding %s on %s", symbol, exchange.value)
        return holding

    def remove_holding(self, holding_id: str) -> None:
        """Remove a holding by id; unknown ids are ignored."""
        holdings = self.list_holdings()
        remaining = [h for h in holdings if h.id != holding_id]
        if len(remaining) == len(holdings):
            return
        self._save(remaining)
        logger.info("Removed holding %s", holding_id)

    def update_holding(self, holding_id: str, patch: HoldingUpdate) -> Holding:
        """Merge patch into an existing holding; investment follows the merged fields."""
        holdings = self.list_holdings()
        index = next((i for i, h in enumerate(holdings) if h.id == holding_id), None)
        if index is None:
            raise NotFoundError("Holding", holding_id)

        current = holdings[index]
        updated = replace(
            current,
            symbol=(
                _require_text(patch.symbol, "Stock symbol is required").upper()
                if patch.symbol is not None
                else current.symbol
            ),
            particulars=(
                _require_text(patch.particulars, "Company name is required")
                if patch.particulars is not None
                else current.particulars
            ),
            sector=(
                _require_text(patch.sector, "Sector is required")
                if patch.sector is not None
                else current.sector
            ),
            purchase_price=(
                _require_price(patch.purchase_price)
                if patch.purchase_price is not None
                else current.purchase_price
            ),
            quantity=(
                _require_quantity(patch.quantity)
                if patch.quantity is not None
                else current.quantity
            ),
            exchange=Exchange(patch.exchange) if patch.exchange is not None else current.exchange,
        )

        if any(h.key == updated.key for i, h in enumerate(holdings) if i != index):
            raise DuplicateHoldingError(updated.symbol, updated.exchange.value)

        holdings[index] = updated
        self._save(holdings)
        return updated

    def clear(self) -> None:
        """Remove all holdings."""
        self._save([])
        logger.info("Cleared portfolio")

    def _save(self, holdings: list[Holding]) -> None:
        payload = _HOLDINGS_ADAPTER.dump_json(
            [StoredHolding.from_domain(h) for h in holdings],
            by_alias=True,
        ).decode("utf-8")
        try:
            self._storage.set_item(self._storage_key, payload)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Unable to save holdings: {exc}") from exc
        finally:
            self._cache.clear()
