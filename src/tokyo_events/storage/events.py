"""Bounded cache of events fetched from the external source.

Events are cached by id whenever the source returns them, so that event
detail pages and the favorites list can be served without another fetch.

## Bounds

- Entries expire `ttl_seconds` after they were last written.
- At most `max_entries` are held; the least recently written entry is
  evicted first.

Writes are unconditional upserts: the last record returned by the source
for an id wins. Batch writes also drop every expired entry, so stale
records do not sit in the cache until they are next read.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Iterable

from tokyo_events.models.event import Event


class EventCache:
    """TTL and size bounded event cache keyed by event id."""

    def __init__(
        self,
        ttl_seconds: float = 60 * 60 * 6,
        max_entries: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        # event id -> (expires_at, event), oldest write first
        self._entries: OrderedDict[str, tuple[float, Event]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, event_id: object) -> bool:
        return isinstance(event_id, str) and self.get(event_id) is not None

    def get(self, event_id: str) -> Event | None:
        """Get a cached event, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(event_id)
            if entry is None:
                return None

            expires_at, event = entry
            if expires_at <= self._clock():
                del self._entries[event_id]
                return None

            return event

    def put(self, event: Event) -> None:
        """Insert or overwrite an event."""
        with self._lock:
            self._put_locked(event)

    def put_all(self, events: Iterable[Event]) -> None:
        """Insert or overwrite several events, dropping expired entries first."""
        with self._lock:
            self._purge_expired_locked()
            for event in events:
                self._put_locked(event)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired_locked(self) -> int:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _put_locked(self, event: Event) -> None:
        self._entries.pop(event.id, None)
        self._entries[event.id] = (self._clock() + self.ttl_seconds, event)

        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
