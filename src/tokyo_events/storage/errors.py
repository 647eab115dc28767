"""Store-level errors.

Lookups that find nothing return None; these exceptions are only raised
when an insert would break a uniqueness invariant.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for store errors."""


class UsernameTakenError(StoreError):
    """Raised when a username is already registered."""

    def __init__(self, username: str):
        super().__init__("Username already taken")
        self.username = username


class FavoriteExistsError(StoreError):
    """Raised when a user has already favorited an event."""

    def __init__(self, user_id: int, event_id: str):
        super().__init__("Event already in favorites")
        self.user_id = user_id
        self.event_id = event_id


class DistrictExistsError(StoreError):
    """Raised when a district slug is already in the catalog."""

    def __init__(self, value: str):
        super().__init__(f"District already exists: {value}")
        self.value = value
