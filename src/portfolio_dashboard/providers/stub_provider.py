"""Synthetic market data used when an upstream source is unavailable."""

import random
from typing import Optional

from portfolio_dashboard.domain.views import MarketQuote, ScrapedRatios
from portfolio_dashboard.providers.extraction import format_earnings


class SyntheticMarketData:
    """
    Generates plausible placeholder quotes and ratios.

    Values are random but bounded; pass a seed for reproducibility.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def quote(self, symbol: str, exchange_code: str) -> MarketQuote:
        price = round(self._rng.random() * 1000 + 100, 2)
        change = round((self._rng.random() - 0.5) * 20, 2)
        change_percent = round((self._rng.random() - 0.5) * 5, 2)
        return MarketQuote(
            symbol=symbol,
            ticker=f"{symbol}.{exchange_code}",
            price=price,
            previous_close=round(price - change, 2),
            change=change,
            change_percent=change_percent,
            pe_ratio=round(self._rng.random() * 30 + 10, 2),
        )

    def ratios(self, symbol: str) -> ScrapedRatios:
        return ScrapedRatios(
            pe_ratio=round(self._rng.random() * 30 + 10, 2),
            earnings=format_earnings(self._rng.random() * 100 + 10),
        )
