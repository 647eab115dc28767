"""Favorite routes.

All endpoints require an authenticated session and act on the current
user's favorites only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from tokyo_events.auth.dependencies import get_current_user, get_state
from tokyo_events.models.base import CamelModel
from tokyo_events.models.event import Event
from tokyo_events.models.user import User
from tokyo_events.storage.errors import FavoriteExistsError
from tokyo_events.storage.state import AppState

router = APIRouter()


class FavoriteStatusResponse(CamelModel):
    """Whether the current user has favorited an event."""

    is_favorite: bool


@router.get("", response_model=list[Event])
async def list_favorites(
    user: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
) -> list[Event]:
    """List the current user's favorite events."""
    return state.favorites.get_user_favorites(user.id)


@router.post("/{event_id}", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    event_id: str,
    user: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
) -> dict:
    """Add an event to the current user's favorites."""
    if state.favorites.get_favorite(user.id, event_id) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Event already in favorites",
        )

    try:
        state.favorites.add_favorite(user.id, event_id)
    except FavoriteExistsError as e:
        # Lost a race with a concurrent request for the same pair
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return {"message": "Added to favorites"}


@router.delete("/{event_id}")
async def remove_favorite(
    event_id: str,
    user: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
) -> dict:
    """Remove an event from the current user's favorites."""
    state.favorites.remove_favorite(user.id, event_id)
    return {"message": "Removed from favorites"}


@router.get("/check/{event_id}", response_model=FavoriteStatusResponse)
async def check_favorite(
    event_id: str,
    user: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
) -> FavoriteStatusResponse:
    """Check whether the current user has favorited an event."""
    return FavoriteStatusResponse(
        is_favorite=state.favorites.get_favorite(user.id, event_id) is not None
    )
