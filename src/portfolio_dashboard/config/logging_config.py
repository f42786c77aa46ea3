"""Process-wide logging setup."""

import logging
import sys

from portfolio_dashboard.config.settings import get_settings

# Libraries that log every request or query at INFO/DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "yfinance", "peewee")


def setup_logging() -> None:
    """Send application logs to stdout at the configured level."""
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
