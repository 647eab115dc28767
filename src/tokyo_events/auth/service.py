"""Credential checks for login and registration."""

from __future__ import annotations

import logging
from enum import Enum

from tokyo_events.auth.passwords import hash_password_async, verify_password_async
from tokyo_events.models.user import User
from tokyo_events.storage.errors import UsernameTakenError
from tokyo_events.storage.users import UserStore

logger = logging.getLogger(__name__)


class LoginErrorKind(str, Enum):
    """Why a login was rejected."""

    NOT_REGISTERED = "not_registered"
    INCORRECT_PASSWORD = "incorrect_password"


LOGIN_ERROR_MESSAGES: dict[LoginErrorKind, str] = {
    LoginErrorKind.NOT_REGISTERED: "User is not registered",
    LoginErrorKind.INCORRECT_PASSWORD: "Incorrect password",
}


class LoginError(Exception):
    """Raised when a username/password pair is rejected."""

    def __init__(self, kind: LoginErrorKind):
        super().__init__(LOGIN_ERROR_MESSAGES[kind])
        self.kind = kind


async def authenticate(users: UserStore, username: str, password: str) -> User:
    """Check a username and password.

    Raises:
        LoginError: With kind NOT_REGISTERED or INCORRECT_PASSWORD
    """
    user = users.get_user_by_username(username)
    if user is None:
        raise LoginError(LoginErrorKind.NOT_REGISTERED)

    if not await verify_password_async(password, user.password_hash):
        raise LoginError(LoginErrorKind.INCORRECT_PASSWORD)

    return user


async def register(users: UserStore, username: str, password: str) -> User:
    """Create a user with a hashed password.

    The username is checked before hashing so duplicates fail fast; the
    store re-checks atomically on insert.

    Raises:
        UsernameTakenError: If the username is already registered
    """
    if users.get_user_by_username(username) is not None:
        raise UsernameTakenError(username)

    password_hash = await hash_password_async(password)
    user = users.create_user(username, password_hash)

    logger.info(f"Registered user {user.id}")
    return user
