"""District catalog routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tokyo_events.auth.dependencies import get_state
from tokyo_events.models.district import District
from tokyo_events.storage.state import AppState

router = APIRouter()


@router.get("", response_model=list[District])
async def list_districts(
    state: AppState = Depends(get_state),
) -> list[District]:
    """List all districts in display order."""
    return state.districts.get_all_districts()
