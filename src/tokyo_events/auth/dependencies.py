"""FastAPI dependencies for authentication.

These dependencies can be used in route handlers to require authentication
and get the current user.

## Usage

```python
from fastapi import Depends
from tokyo_events.auth import get_current_user
from tokyo_events.models import User

@router.get("/favorites")
async def list_favorites(user: User = Depends(get_current_user)):
    ...
```
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from tokyo_events.auth.session import SessionData, verify_session_token
from tokyo_events.config import get_settings
from tokyo_events.models.user import User
from tokyo_events.storage.state import AppState

logger = logging.getLogger(__name__)


def get_state(request: Request) -> AppState:
    """Get the application state attached by the app factory."""
    return request.app.state.store


async def get_session_data(
    request: Request,
    state: AppState = Depends(get_state),
) -> SessionData | None:
    """Extract and verify session data from the session cookie.

    Returns None if there is no cookie, the token is invalid or expired,
    or its session has been revoked.
    """
    settings = get_settings()

    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    session = verify_session_token(token)
    if session is None:
        return None

    record = state.sessions.get(session.session_id)
    if record is None or record.user_id != session.user_id:
        logger.debug("Session is not registered")
        return None

    return session


async def get_current_user_optional(
    session: SessionData | None = Depends(get_session_data),
    state: AppState = Depends(get_state),
) -> User | None:
    """Get the current user if logged in, or None.

    Use this for routes that work with or without authentication.
    """
    if session is None:
        return None

    user = state.users.get_user(session.user_id)
    if user is None:
        logger.warning(f"Session for non-existent user: {session.user_id}")
        return None

    return user


async def get_current_user(
    user: User | None = Depends(get_current_user_optional),
) -> User:
    """Get the current authenticated user.

    Raises 401 if not authenticated.
    Use this for routes that require authentication.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    return user
