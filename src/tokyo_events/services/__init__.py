"""Application services."""

from tokyo_events.services.events import EventService

__all__ = ["EventService"]
