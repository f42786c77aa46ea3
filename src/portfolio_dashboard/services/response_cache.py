"""In-memory provider response cache."""

import time
from typing import Any, Callable, Optional


class ResponseCache:
    """
    Short-lived cache for provider responses, keyed by string.

    One instance is shared by both adapters and the store; every holdings
    mutation clears it so edited holdings never see stale quotes.
    """

    def __init__(self, ttl_seconds: float = 10.0, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value if still within TTL, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
