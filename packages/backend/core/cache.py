"""In-process expiring key-value cache.

Entries are stored whole and replaced on refresh, never mutated in place,
so concurrent requests can share an instance without locking. Expired
entries are dropped lazily when read.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """Key-value cache with a default time-to-live.

    Args:
        ttl_seconds: Default lifetime for entries written with ``set``.
        clock: Monotonic time source. Tests pass a fake to control expiry.
        name: Label used in log messages.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._name = name
        self._entries: dict[str, _Entry[V]] = {}

    @property
    def ttl(self) -> float:
        """Default time-to-live in seconds."""
        return self._ttl

    def get(self, key: str) -> V | None:
        """Return the cached value, or None when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self._entries.pop(key, None)
            logger.debug("%s: evicted expired entry %s", self._name, key)
            return None
        return entry.value

    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """Store a value, replacing any previous entry for the key."""
        lifetime = self._ttl if ttl is None else ttl
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + lifetime)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
