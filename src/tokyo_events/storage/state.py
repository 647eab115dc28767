"""Process-wide application state.

`AppState` owns every store. It is built once by the application factory
and attached to `app.state`; request handlers reach it through the
`get_state` dependency, so tests can build isolated instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tokyo_events.config import Settings
from tokyo_events.storage.districts import DistrictCatalog
from tokyo_events.storage.events import EventCache
from tokyo_events.storage.favorites import FavoriteStore
from tokyo_events.storage.sessions import SessionRegistry
from tokyo_events.storage.users import UserStore


@dataclass
class AppState:
    """Container for all in-memory stores."""

    users: UserStore = field(default_factory=UserStore)
    districts: DistrictCatalog = field(default_factory=DistrictCatalog)
    events: EventCache = field(default_factory=EventCache)
    sessions: SessionRegistry = field(default_factory=SessionRegistry)
    favorites: FavoriteStore = field(init=False)

    def __post_init__(self) -> None:
        self.favorites = FavoriteStore(self.events)

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        """Build state with the cache bounds from settings."""
        return cls(
            events=EventCache(
                ttl_seconds=settings.event_cache_ttl_seconds,
                max_entries=settings.event_cache_max_entries,
            ),
        )
