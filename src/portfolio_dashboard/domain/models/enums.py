"""Enumerations for domain models."""

from enum import Enum


class Exchange(str, Enum):
    """Stock exchanges a holding can be listed on."""

    NSE = "NSE"  # primary
    BSE = "BSE"  # secondary

    @property
    def yahoo_code(self) -> str:
        """Ticker suffix used by Yahoo Finance (e.g. TCS.NS)."""
        return "NS" if self is Exchange.NSE else "BO"


class CycleState(str, Enum):
    """Dashboard state as driven by refresh cycles."""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    SUCCESS = "SUCCESS"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"  # an adapter raised instead of degrading
    EMPTY = "EMPTY"
    ERROR = "ERROR"
