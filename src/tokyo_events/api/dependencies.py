"""FastAPI dependencies for services."""

from __future__ import annotations

from fastapi import Depends, Request

from tokyo_events.auth.dependencies import get_state
from tokyo_events.services.events import EventService
from tokyo_events.storage.state import AppState


def get_event_service(
    request: Request,
    state: AppState = Depends(get_state),
) -> EventService:
    """Get an event service bound to the app's source and state."""
    return EventService(request.app.state.event_source, state)
