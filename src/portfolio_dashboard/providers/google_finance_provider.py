"""Google Finance P/E and earnings provider (HTML scraping)."""

import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from portfolio_dashboard.domain.views import ScrapedRatios
from portfolio_dashboard.providers.extraction import (
    EARNINGS_STRATEGIES,
    PE_RATIO_STRATEGIES,
    first_match,
    format_earnings,
)
from portfolio_dashboard.providers.market_data_provider import ProviderError

logger = logging.getLogger(__name__)


class GoogleFinanceRatioProvider:
    """Scrapes the Google Finance quote page for an NSE symbol."""

    BASE_URL = "https://www.google.com/finance/quote"

    # Headers to mimic browser
    HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "DNT": "1",
    }

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 20.0):
        self._client = client
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    async def get_ratios(self, symbol: str) -> ScrapedRatios:
        url = f"{self.BASE_URL}/{symbol}:NSE"
        response = await self._get_client().get(url)
        if response.status_code != 200:
            raise ProviderError(f"Google Finance HTTP {response.status_code}: {response.reason_phrase}")

        ratios = self.parse(response.text)
        logger.info(
            "Google Finance scraping for %s: pe=%s earnings=%s has_data=%s",
            symbol,
            ratios.pe_ratio,
            ratios.earnings,
            ratios.has_data,
        )
        return ratios

    @staticmethod
    def parse(html: str) -> ScrapedRatios:
        """Extract P/E and earnings from a quote page; missing fields stay None."""
        soup = BeautifulSoup(html, "html.parser")
        pe_ratio = first_match(PE_RATIO_STRATEGIES, soup)
        eps = first_match(EARNINGS_STRATEGIES, soup)
        return ScrapedRatios(
            pe_ratio=pe_ratio,
            earnings=format_earnings(eps) if eps is not None else None,
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
