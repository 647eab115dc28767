"""Base event source abstraction.

This module defines the interface for external event sources. A source
takes a search request and returns `Event` records in our canonical format
(`tokyo_events.models.event`); the application caches whatever it returns.

## Contract

- `search_events(params, district)` returns every event the source found
  for the date range and district. An empty list is a valid answer.
- `get_event(event_id)` returns one event, or None when the source does
  not know the id.
- Any transport failure, non-2xx response, or reply that does not match
  the expected shape raises `SourceError`. Partial results are never
  returned.

## Retries

Network errors and timeouts are retried up to `max_attempts` times with
exponential backoff. The default is a single attempt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tokyo_events.models.district import District
from tokyo_events.models.event import Event, SearchParams


class SourceError(Exception):
    """Base exception for event source errors."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.source = source
        self.status_code = status_code
        self.response_body = response_body


class SourceResponseError(SourceError):
    """Raised when a source reply does not match the expected format."""

    pass


class EventSource(ABC):
    """Abstract base class for external event sources.

    Attributes:
        name: Human-readable source name
        base_url: Base URL for the API
        requires_api_key: Whether this source requires an API key
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 60.0,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the source.

        Args:
            api_key: API key if required by the source
            timeout: Request timeout in seconds
            max_attempts: Attempts per request for network errors
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> EventSource:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """POST JSON to the API with retry logic.

        Args:
            url: Full URL to post to
            payload: JSON body

        Returns:
            HTTP response with a 2xx status

        Raises:
            SourceError: If the request fails after retries or the API
                answers with an error status
        """
        if self.requires_api_key and not self.api_key:
            raise SourceError(f"{self.name} API key is not configured", source=self.name)

        client = self._get_client()

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
                reraise=True,
            ):
                with attempt:
                    response = await client.post(
                        url, json=payload, headers=self._get_default_headers()
                    )
        except httpx.HTTPError as e:
            raise SourceError(f"Request to {self.name} failed: {e}", source=self.name) from e

        if response.status_code >= 400:
            raise SourceError(
                f"API request failed: {response.status_code}",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    @abstractmethod
    async def search_events(
        self,
        params: SearchParams,
        district: District | None = None,
    ) -> list[Event]:
        """Search events in a date range.

        Args:
            params: Date range and district slug
            district: Resolved district for the slug, if known

        Returns:
            Events in canonical format

        Raises:
            SourceError: If events cannot be retrieved
        """
        pass

    @abstractmethod
    async def get_event(self, event_id: str) -> Event | None:
        """Get a single event by id.

        Returns:
            The event, or None if the source does not know it

        Raises:
            SourceError: If the event cannot be retrieved
        """
        pass
