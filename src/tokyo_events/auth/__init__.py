"""Authentication module for the Tokyo event finder.

Provides username/password authentication and cookie sessions.

## Login Flow

1. Client posts username and password to /api/auth/login
2. Username is looked up; unknown users are rejected as not registered
3. Password is checked against the stored bcrypt hash
4. A session is registered server-side and its signed token is set as an
   HTTP-only cookie

Registration performs the same session setup right after creating the user.

## Security

- Passwords are stored only as bcrypt hashes
- Sessions use signed cookies backed by a server-side registry
- Logout revokes the session server-side
"""

from tokyo_events.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_state,
)
from tokyo_events.auth.passwords import hash_password, verify_password
from tokyo_events.auth.service import LoginError, LoginErrorKind, authenticate, register
from tokyo_events.auth.session import (
    SessionData,
    create_session_token,
    start_session,
    verify_session_token,
)

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_state",
    "hash_password",
    "verify_password",
    "LoginError",
    "LoginErrorKind",
    "authenticate",
    "register",
    "SessionData",
    "create_session_token",
    "start_session",
    "verify_session_token",
]
