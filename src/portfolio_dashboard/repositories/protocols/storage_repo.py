"""Local storage protocol: string values under string keys."""

from typing import Protocol, Optional


class LocalStorage(Protocol):
    """Interface for durable key-value storage."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the value stored under key."""
        ...
