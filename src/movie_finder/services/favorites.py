"""Anonymous per-session favorites."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from movie_finder.domain.errors import (
    CapacityError,
    MissingSessionError,
    ValidationError,
)
from movie_finder.domain.favorites import Favorite
from movie_finder.services.cache import Clock, utc_now

SESSION_TTL = timedelta(days=7)
MAX_FAVORITES_PER_SESSION = 200

_logger = logging.getLogger(__name__)


class FavoritesBucket:
    """The favorites of one session together with its expiry clock."""

    def __init__(self, expires_at: datetime) -> None:
        self.items: dict[int, Favorite] = {}
        self.expires_at = expires_at
        self.lock = threading.Lock()

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def touch(self, now: datetime, ttl: timedelta) -> None:
        self.expires_at = now + ttl


class FavoritesStore:
    """In-memory favorites keyed by session id.

    Buckets expire lazily: a bucket whose TTL lapsed is replaced by an empty
    one the next time its session touches the store. Nothing sweeps abandoned
    buckets in the background.
    """

    def __init__(
        self,
        ttl: timedelta = SESSION_TTL,
        max_items: int = MAX_FAVORITES_PER_SESSION,
        clock: Clock = utc_now,
    ) -> None:
        self.ttl = ttl
        self.max_items = max_items
        self._clock = clock
        self._buckets: dict[str, FavoritesBucket] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def list(self, session_id: str) -> list[Favorite]:
        """Return the session's favorites ordered by title, then id."""
        bucket = self._resolve_bucket(session_id)
        with bucket.lock:
            favorites = list(bucket.items.values())
        return sorted(favorites, key=_listing_key)

    def add(self, session_id: str, favorite: Favorite) -> None:
        """Insert or overwrite a favorite, enforcing the per-session cap."""
        if favorite is None:
            raise ValidationError("Favorite body must not be null")
        _require_positive_id(favorite.id, "Favorite 'id' must be a positive number")
        bucket = self._resolve_bucket(session_id)
        with bucket.lock:
            if (
                favorite.id not in bucket.items
                and len(bucket.items) >= self.max_items
            ):
                raise CapacityError(f"Favorites limit exceeded ({self.max_items})")
            bucket.items[favorite.id] = replace(favorite)

    def remove(self, session_id: str, favorite_id: int) -> None:
        """Drop a favorite; unknown ids are ignored."""
        _require_positive_id(favorite_id, "Parameter 'id' must be a positive number")
        bucket = self._resolve_bucket(session_id)
        with bucket.lock:
            bucket.items.pop(favorite_id, None)

    def _resolve_bucket(self, session_id: str) -> FavoritesBucket:
        """Get, create or rotate the session's bucket and extend its TTL."""
        if not session_id or not session_id.strip():
            raise MissingSessionError("Session id is missing")
        with self._lock:
            now = self._clock()
            bucket = self._buckets.get(session_id)
            if bucket is None or bucket.is_expired(now):
                if bucket is not None:
                    _logger.debug("Rotating expired favorites bucket")
                bucket = FavoritesBucket(expires_at=now + self.ttl)
                self._buckets[session_id] = bucket
            else:
                bucket.touch(now, self.ttl)
            return bucket


@dataclass
class FavoritesService:
    """Application service for favorites requests."""

    store: FavoritesStore

    def list(self, session_id: str) -> list[Favorite]:
        """Return the favorites of a session."""
        return self.store.list(session_id)

    def add(self, session_id: str, favorite: Favorite | None) -> None:
        """Validate and add a favorite for a session."""
        if favorite is None:
            raise ValidationError("Favorite body must not be null")
        _require_positive_id(favorite.id, "Favorite 'id' must be a positive number")
        self.store.add(session_id, favorite)

    def remove(self, session_id: str, favorite_id: int) -> None:
        """Validate and remove a favorite for a session."""
        _require_positive_id(favorite_id, "Parameter 'id' must be a positive number")
        self.store.remove(session_id, favorite_id)


def _require_positive_id(value: int | None, message: str) -> None:
    if value is None or value <= 0:
        raise ValidationError(message)


def _listing_key(favorite: Favorite) -> tuple[bool, str, int]:
    title = favorite.title
    return (title is None, title.lower() if title is not None else "", favorite.id)
