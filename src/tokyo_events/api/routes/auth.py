"""Authentication routes.

Handles username/password registration, login and session management.

## Endpoints

1. POST /api/auth/register - Create a user and log in
2. POST /api/auth/login - Check credentials and set the session cookie
3. POST /api/auth/logout - Revoke the session and clear the cookie
4. GET /api/auth/me - Get the current user

## Session Management

Sessions are stored in HTTP-only cookies. The session token is a signed JWT
containing the user ID, a server-registered session ID and the expiration
time.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from tokyo_events.auth.dependencies import get_current_user, get_session_data, get_state
from tokyo_events.auth.service import LoginError, authenticate, register
from tokyo_events.auth.session import (
    SessionData,
    clear_session_cookie,
    set_session_cookie,
    start_session,
)
from tokyo_events.models.user import LoginRequest, RegisterRequest, User, UserPublic
from tokyo_events.storage.errors import UsernameTakenError
from tokyo_events.storage.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register_user(
    body: RegisterRequest,
    response: Response,
    state: AppState = Depends(get_state),
) -> UserPublic:
    """Register a new user and log them in."""
    try:
        user = await register(state.users, body.username, body.password)
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    set_session_cookie(response, start_session(state.sessions, user.id))

    return user.to_public()


@router.post("/login", response_model=UserPublic)
async def login(
    body: LoginRequest,
    response: Response,
    state: AppState = Depends(get_state),
) -> UserPublic:
    """Log in with username and password."""
    try:
        user = await authenticate(state.users, body.username, body.password)
    except LoginError as e:
        logger.info(f"Login rejected: {e.kind.value}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    set_session_cookie(response, start_session(state.sessions, user.id))

    logger.info(f"User {user.id} logged in")

    return user.to_public()


@router.post("/logout")
async def logout(
    response: Response,
    session: SessionData | None = Depends(get_session_data),
    state: AppState = Depends(get_state),
) -> dict:
    """Log out the current user.

    Revokes the session and clears the session cookie.
    """
    if session:
        state.sessions.revoke(session.session_id)
        logger.info(f"User {session.user_id} logged out")

    clear_session_cookie(response)

    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserPublic)
async def get_me(
    user: User = Depends(get_current_user),
) -> UserPublic:
    """Get the current user."""
    return user.to_public()
