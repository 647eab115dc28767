"""External event sources."""

from tokyo_events.providers.base import EventSource, SourceError, SourceResponseError
from tokyo_events.providers.perplexity import PerplexityEventSource

__all__ = [
    "EventSource",
    "SourceError",
    "SourceResponseError",
    "PerplexityEventSource",
]
