"""Favorite store.

Favorites are keyed by the composite (user_id, event_id) pair, which is
unique: `add_favorite` is an atomic insert-if-absent and raises
`FavoriteExistsError` for a pair that is already present, leaving the
existing record untouched.

Favorites reference events by opaque id. `get_user_favorites` joins them
through the event cache. The store also keeps the last known copy of every
favorited event so that a favorite does not disappear from the list once
the cache entry expires.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

from tokyo_events.models.event import Event
from tokyo_events.models.user import Favorite
from tokyo_events.storage.errors import FavoriteExistsError
from tokyo_events.storage.events import EventCache

logger = logging.getLogger(__name__)


class FavoriteStore:
    """In-memory favorites keyed by (user_id, event_id)."""

    def __init__(self, events: EventCache) -> None:
        self._events = events
        self._favorites: dict[tuple[int, str], Favorite] = {}
        # Last known copy of each favorited event
        self._snapshots: dict[str, Event] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._favorites)

    def get_user_favorites(self, user_id: int) -> list[Event]:
        """Get the events a user has favorited.

        Favorites whose event was never seen by the cache are skipped.
        """
        with self._lock:
            event_ids = [fav.event_id for fav in self._favorites.values() if fav.user_id == user_id]

        result: list[Event] = []
        for event_id in event_ids:
            event = self._events.get(event_id)
            with self._lock:
                if event is not None:
                    # Skip favorites removed since the id list was taken
                    if (user_id, event_id) in self._favorites:
                        self._snapshots[event_id] = event
                else:
                    event = self._snapshots.get(event_id)
            if event is not None:
                result.append(event)

        return result

    def count_user_favorites(self, user_id: int) -> int:
        with self._lock:
            return sum(1 for fav in self._favorites.values() if fav.user_id == user_id)

    def get_favorite(self, user_id: int, event_id: str) -> Favorite | None:
        """Get a favorite by its composite key, or None."""
        return self._favorites.get((user_id, event_id))

    def add_favorite(self, user_id: int, event_id: str) -> Favorite:
        """Favorite an event for a user.

        Raises:
            FavoriteExistsError: If the user already favorited the event
        """
        event = self._events.get(event_id)

        with self._lock:
            if (user_id, event_id) in self._favorites:
                raise FavoriteExistsError(user_id, event_id)

            favorite = Favorite(
                id=self._next_id,
                user_id=user_id,
                event_id=event_id,
                created_at=datetime.now(timezone.utc),
            )
            self._favorites[favorite.key] = favorite
            self._next_id += 1

            if event is not None:
                self._snapshots[event_id] = event

        logger.debug(f"User {user_id} favorited event {event_id}")
        return favorite

    def remove_favorite(self, user_id: int, event_id: str) -> None:
        """Remove a favorite. Removing a missing favorite is a no-op."""
        with self._lock:
            removed = self._favorites.pop((user_id, event_id), None)
            if removed is None:
                return

            if not any(fav.event_id == event_id for fav in self._favorites.values()):
                self._snapshots.pop(event_id, None)

        logger.debug(f"User {user_id} unfavorited event {event_id}")
