"""In-memory storage for users, favorites, districts, events and sessions.

Nothing here survives a restart. All stores are owned by a single
`AppState` created at application startup.
"""

from tokyo_events.storage.districts import DEFAULT_DISTRICTS, DistrictCatalog
from tokyo_events.storage.errors import (
    DistrictExistsError,
    FavoriteExistsError,
    StoreError,
    UsernameTakenError,
)
from tokyo_events.storage.events import EventCache
from tokyo_events.storage.favorites import FavoriteStore
from tokyo_events.storage.sessions import SessionRecord, SessionRegistry
from tokyo_events.storage.state import AppState
from tokyo_events.storage.users import UserStore

__all__ = [
    # State
    "AppState",
    # Stores
    "UserStore",
    "FavoriteStore",
    "DistrictCatalog",
    "DEFAULT_DISTRICTS",
    "EventCache",
    "SessionRegistry",
    "SessionRecord",
    # Errors
    "StoreError",
    "UsernameTakenError",
    "FavoriteExistsError",
    "DistrictExistsError",
]
