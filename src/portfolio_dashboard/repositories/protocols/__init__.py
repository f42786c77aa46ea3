"""Repository protocol definitions (interfaces)."""

from portfolio_dashboard.repositories.protocols.storage_repo import LocalStorage

__all__ = [
    "LocalStorage",
]
