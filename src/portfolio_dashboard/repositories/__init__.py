"""Repository layer - data access abstractions and implementations."""

from portfolio_dashboard.repositories.protocols import LocalStorage

__all__ = [
    "LocalStorage",
]
