"""Identity store."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

from tokyo_events.models.user import User
from tokyo_events.storage.errors import UsernameTakenError

logger = logging.getLogger(__name__)


class UserStore:
    """In-memory user records keyed by numeric id.

    Ids start at 1 and increase monotonically. Usernames are unique and
    compared case-sensitively. The store never hashes passwords; callers pass
    the hash in.
    """

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def get_user(self, user_id: int) -> User | None:
        """Get a user by id, or None."""
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        """Get a user by exact username, or None."""
        with self._lock:
            users = list(self._users.values())
        return next((u for u in users if u.username == username), None)

    def create_user(self, username: str, password_hash: str) -> User:
        """Create a user with the next id.

        The uniqueness check and the insert happen under one lock, so two
        concurrent registrations for the same username cannot both succeed.

        Raises:
            UsernameTakenError: If the username is already registered
        """
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise UsernameTakenError(username)

            user = User(
                id=self._next_id,
                username=username,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            self._next_id += 1

        logger.debug(f"Created user {user.id}")
        return user
