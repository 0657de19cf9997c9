"""Time-bounded result cache."""

import logging
import threading
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Generic, Protocol, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Clock = Callable[[], datetime]

_logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


class Cache(Protocol[K, V]):
    """Cache interface for memoized lookups."""

    def get(self, key: K) -> V | None:
        """Return a cached value if present and not expired."""

    def set(self, key: K, value: V, ttl_seconds: float) -> None:
        """Store a cached value with a TTL in seconds."""

    async def get_or_compute(
        self, key: K, ttl_seconds: float, compute: Callable[[], Awaitable[V]]
    ) -> V:
        """Return a live cached value or compute, store and return a new one."""


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the moment it stops being served."""

    value: V
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """An entry is expired once ``now`` reaches ``expires_at``."""
        return now >= self.expires_at


class ResultCache(Generic[K, V]):
    """In-memory TTL cache with get-or-compute semantics.

    Entries are replaced wholesale on refresh and never evicted otherwise.
    Failed computations are not stored. Concurrent misses on the same key are
    not deduplicated: each caller runs ``compute`` and the last write wins.
    """

    def __init__(self, name: str = "cache", clock: Clock = utc_now) -> None:
        self.name = name
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: K) -> V | None:
        """Return a cached value if it hasn't expired."""
        entry = self._live_entry(key)
        return None if entry is None else entry.value

    def set(self, key: K, value: V, ttl_seconds: float) -> None:
        """Store a cached value with a TTL."""
        expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)

    async def get_or_compute(
        self, key: K, ttl_seconds: float, compute: Callable[[], Awaitable[V]]
    ) -> V:
        """Serve ``key`` from the cache, computing it on a miss or expiry.

        Exceptions raised by ``compute`` propagate unchanged and leave the
        cache untouched, so the next call for the same key retries.
        """
        entry = self._live_entry(key)
        if entry is not None:
            return entry.value

        _logger.debug("Cache miss: cache=%s key=%s", self.name, key)
        value = await compute()
        self.set(key, value, ttl_seconds)
        return value

    def _live_entry(self, key: K) -> CacheEntry[V] | None:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry
