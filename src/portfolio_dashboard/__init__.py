"""Portfolio dashboard: live gain/loss tracking for a small set of stock holdings."""

__version__ = "0.1.0"
