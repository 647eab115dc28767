"""User and favorite models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tokyo_events.models.base import CamelModel


class User(BaseModel):
    """A registered user as held by the identity store.

    The password is only ever stored as a bcrypt hash. Use `to_public()` for
    anything that leaves the process.
    """

    id: int
    username: str
    password_hash: str
    created_at: datetime

    def to_public(self) -> UserPublic:
        """Project the user without its credential."""
        return UserPublic(id=self.id, username=self.username, created_at=self.created_at)


class UserPublic(CamelModel):
    """User information safe to return to clients."""

    id: int
    username: str
    created_at: datetime


class Favorite(CamelModel):
    """A user's saved event, unique per (user_id, event_id)."""

    id: int
    user_id: int
    event_id: str
    created_at: datetime

    @property
    def key(self) -> tuple[int, str]:
        """Composite key identifying this favorite."""
        return (self.user_id, self.event_id)


class RegisterRequest(BaseModel):
    """Registration body."""

    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """Login body."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
