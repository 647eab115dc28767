"""Domain models for the Tokyo event finder."""

from tokyo_events.models.district import District
from tokyo_events.models.event import Event, SearchParams
from tokyo_events.models.user import (
    Favorite,
    LoginRequest,
    RegisterRequest,
    User,
    UserPublic,
)

__all__ = [
    # Event
    "Event",
    "SearchParams",
    # District
    "District",
    # User
    "User",
    "UserPublic",
    "Favorite",
    "RegisterRequest",
    "LoginRequest",
]
