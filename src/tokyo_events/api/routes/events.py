"""Event search routes.

Events come from the external event source. Every event returned is cached
so that details and favorites can be served later.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from tokyo_events.api.dependencies import get_event_service
from tokyo_events.models.event import Event, SearchParams
from tokyo_events.providers.base import SourceError
from tokyo_events.services.events import EventService

logger = logging.getLogger(__name__)

router = APIRouter()


def _first_error_message(error: ValidationError) -> str:
    message = error.errors()[0].get("msg", "Invalid search parameters")
    return message.removeprefix("Value error, ")


@router.get("", response_model=list[Event])
async def search_events(
    date_from: str | None = Query(default=None, alias="dateFrom"),
    date_to: str | None = Query(default=None, alias="dateTo"),
    district: str | None = Query(default=None),
    service: EventService = Depends(get_event_service),
) -> list[Event]:
    """Search events between two dates, optionally in one district."""
    if not date_from or not date_to:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="dateFrom and dateTo are required",
        )

    try:
        params = SearchParams(date_from=date_from, date_to=date_to, district=district)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_first_error_message(e),
        )

    try:
        return await service.search(params)
    except SourceError as e:
        logger.error(f"Error fetching events: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch events. Please try again later.",
        )


@router.get("/{event_id}", response_model=Event)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> Event:
    """Get a single event."""
    try:
        event = await service.get_event(event_id)
    except SourceError as e:
        logger.error(f"Error fetching event details for {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch event details. Please try again later.",
        )

    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )

    return event
