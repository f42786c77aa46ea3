"""
Ranked extraction strategies for pulling numbers out of a quote page.

Each strategy looks for a value in its own way; ``first_match`` walks a
ranked list and returns the first accepted value. Page markup changes
often, so the lists are ordered from most to least specific.
"""

import re
from typing import Callable, Optional, Protocol, Sequence

from bs4 import BeautifulSoup

Accept = Callable[[float], bool]

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_FIRST_NUMBER = re.compile(r"(\d+\.?\d*)")
_PLACEHOLDERS = {"", "-", "N/A", "—"}


def _any_value(value: float) -> bool:
    return True


def _positive(value: float) -> bool:
    return value > 0


def _plausible_pe(value: float) -> bool:
    return 0 < value < 100


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse a display string such as ``₹1,234.50`` into a float."""
    if text is None:
        return None
    text = text.strip()
    if text in _PLACEHOLDERS:
        return None
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        return float(cleaned)
    except ValueError:
        return None


class ExtractionStrategy(Protocol):
    """One way of locating a numeric value in a parsed page."""

    def extract(self, soup: BeautifulSoup) -> Optional[float]:
        ...


class AttributeStrategy:
    """Reads the text of the first element carrying a matching attribute."""

    def __init__(self, attribute: str, value: str, contains: bool = False, accept: Accept = _any_value):
        self._attribute = attribute
        self._value = value
        self._contains = contains
        self._accept = accept

    def _matches(self, attr_value: Optional[str]) -> bool:
        if attr_value is None:
            return False
        if self._contains:
            return self._value in attr_value
        return attr_value == self._value

    def extract(self, soup: BeautifulSoup) -> Optional[float]:
        element = soup.find(attrs={self._attribute: self._matches})
        if element is None:
            return None
        value = parse_number(element.get_text(strip=True))
        if value is not None and self._accept(value):
            return value
        return None


class LabelSiblingStrategy:
    """Finds an element whose text contains a label and reads its next sibling."""

    def __init__(self, label: str, tag: str = "div", accept: Accept = _any_value):
        self._label = label.lower()
        self._tag = tag
        self._accept = accept

    def extract(self, soup: BeautifulSoup) -> Optional[float]:
        for element in soup.find_all(self._tag):
            # Only leaf elements; containers hold whole rows, not the label
            if element.find(self._tag) is not None:
                continue
            if self._label not in element.get_text(" ", strip=True).lower():
                continue
            sibling = element.find_next_sibling(self._tag)
            if sibling is None:
                continue
            value = parse_number(sibling.get_text(strip=True))
            if value is not None and self._accept(value):
                return value
        return None


class TextPatternStrategy:
    """Last resort: scans element text for a label pattern and takes the first number."""

    def __init__(self, pattern: str, tag: str = "div", accept: Accept = _any_value):
        self._pattern = re.compile(pattern, re.IGNORECASE)
        self._tag = tag
        self._accept = accept

    def extract(self, soup: BeautifulSoup) -> Optional[float]:
        texts = [element.get_text(" ", strip=True) for element in soup.find_all(self._tag)]
        # Smallest enclosing element first, so the number sits next to its label
        for text in sorted(texts, key=len):
            if not self._pattern.search(text):
                continue
            match = _FIRST_NUMBER.search(text)
            if not match:
                continue
            value = float(match.group(1))
            if self._accept(value):
                return value
        return None


def first_match(strategies: Sequence[ExtractionStrategy], soup: BeautifulSoup) -> Optional[float]:
    """Return the value found by the highest-ranked strategy, or None."""
    for strategy in strategies:
        value = strategy.extract(soup)
        if value is not None:
            return value
    return None


PE_RATIO_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    AttributeStrategy("data-test-id", "PE ratio", accept=_positive),
    AttributeStrategy("aria-label", "PE ratio", contains=True, accept=_positive),
    LabelSiblingStrategy("PE ratio", accept=_positive),
    LabelSiblingStrategy("P/E ratio", accept=_positive),
    TextPatternStrategy(r"P/E|PE.*ratio", accept=_plausible_pe),
)

EARNINGS_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    AttributeStrategy("data-test-id", "EPS (TTM)"),
    AttributeStrategy("aria-label", "EPS", contains=True),
    LabelSiblingStrategy("EPS"),
    LabelSiblingStrategy("Earnings per share"),
    TextPatternStrategy(r"EPS|earnings.*share"),
)


def format_earnings(value: float) -> str:
    """Render earnings per share as a rupee label."""
    return f"₹{value:.2f} (TTM)"
