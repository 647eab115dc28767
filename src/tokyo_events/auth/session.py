"""Session management using signed JWT tokens.

Sessions are stored as signed JWT tokens in HTTP-only cookies.
The tokens contain:
- User ID
- Session ID (registered server-side, revoked on logout)
- Session creation time
- Expiration time

## Security

- Tokens are signed with the application secret key
- Tokens expire after a configurable period (default: 7 days)
- A token is only honoured while its session ID is live in the
  `SessionRegistry`
- Cookies are HTTP-only to prevent XSS access
- Cookies are Secure in production (HTTPS only)
- SameSite=Lax to prevent CSRF

## Token Structure

```json
{
  "sub": "42",
  "sid": "session-id",
  "iat": 1234567890,
  "exp": 1235172690,
  "type": "session"
}
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Response
from jose import JWTError, jwt

from tokyo_events.config import get_settings
from tokyo_events.storage.sessions import SessionRegistry

logger = logging.getLogger(__name__)

# JWT configuration
ALGORITHM = "HS256"
TOKEN_TYPE = "session"


@dataclass
class SessionData:
    """Data stored in the session token."""

    user_id: int
    session_id: str
    created_at: datetime
    expires_at: datetime

    @property
    def is_expired(self) -> bool:
        """Check if the session has expired."""
        return datetime.now(timezone.utc) > self.expires_at


def create_session_token(
    user_id: int,
    session_id: str,
    expires_at: datetime,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed session token for a user.

    Args:
        user_id: The user's id
        session_id: Id of the registered server-side session
        expires_at: When the token stops being valid
        issued_at: Token creation time (default: now)

    Returns:
        Signed JWT token string
    """
    settings = get_settings()

    if issued_at is None:
        issued_at = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "sid": session_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "type": TOKEN_TYPE,
    }

    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def verify_session_token(token: str) -> SessionData | None:
    """Verify and decode a session token.

    Only the signature and claims are checked here; whether the session is
    still registered is up to the caller.

    Args:
        token: The JWT token string

    Returns:
        SessionData if valid, None if invalid or expired
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.debug(f"Session token verification failed: {e}")
        return None

    if payload.get("type") != TOKEN_TYPE:
        logger.debug("Invalid token type")
        return None

    try:
        session = SessionData(
            user_id=int(payload["sub"]),
            session_id=str(payload["sid"]),
            created_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.debug(f"Invalid token payload: {e}")
        return None

    # Check expiration (jose should handle this, but double-check)
    if session.is_expired:
        logger.debug("Session token expired")
        return None

    return session


def start_session(
    registry: SessionRegistry,
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """Register a session for a user and return its signed token."""
    settings = get_settings()

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.session_max_age_seconds)

    record = registry.create(user_id, expires_at=now + expires_delta)
    return create_session_token(
        user_id,
        record.session_id,
        expires_at=record.expires_at,
        issued_at=now,
    )


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session cookie to a response."""
    settings = get_settings()

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Remove the session cookie from the client."""
    settings = get_settings()

    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
