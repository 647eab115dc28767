"""Event search and lookup on top of the external source and the cache."""

from __future__ import annotations

import logging

from tokyo_events.models.event import Event, SearchParams
from tokyo_events.providers.base import EventSource
from tokyo_events.storage.state import AppState

logger = logging.getLogger(__name__)


class EventService:
    """Fetch events from a source and keep them in the event cache.

    Source errors are not caught here; the HTTP layer turns them into a
    generic failure response.
    """

    def __init__(self, source: EventSource, state: AppState) -> None:
        self.source = source
        self.state = state

    async def search(self, params: SearchParams) -> list[Event]:
        """Search events and cache every result.

        An unknown district slug is searched as all areas.
        """
        district = None
        if params.district:
            district = self.state.districts.get_district_by_value(params.district)
            if district is None:
                logger.info(f"Unknown district '{params.district}', searching all areas")

        logger.info(
            f"Searching events from {params.date_from} to {params.date_to}"
            f" in {district.value if district else 'all areas'}"
        )

        events = await self.source.search_events(params, district)
        self.state.events.put_all(events)
        return events

    async def get_event(self, event_id: str) -> Event | None:
        """Get an event from the cache, fetching it on a miss."""
        cached = self.state.events.get(event_id)
        if cached is not None:
            return cached

        event = await self.source.get_event(event_id)
        if event is not None:
            self.state.events.put(event)
        return event
