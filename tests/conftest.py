"""Pytest fixtures for Tokyo event finder tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the event source is faked)
2. Every test gets its own in-memory state
3. Isolated test environment with controlled configuration
"""

import os
from datetime import date

import pytest
import pytest_asyncio

# Set test environment BEFORE importing application modules
# This ensures no real services are contacted during test collection
os.environ.setdefault("SECRET_KEY", "test-secret-key-at-least-32-characters-long")
os.environ.setdefault("PERPLEXITY_API_KEY", "test-perplexity-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from httpx import ASGITransport, AsyncClient

from tokyo_events.api import create_app
from tokyo_events.models.district import District
from tokyo_events.models.event import Event, SearchParams
from tokyo_events.providers.base import EventSource, SourceError
from tokyo_events.storage.state import AppState


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from tokyo_events.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeEventSource(EventSource):
    """In-process event source that records the calls made to it."""

    name = "fake"
    base_url = "http://fake.invalid"

    def __init__(self, events: list[Event] | None = None):
        super().__init__()
        self.events = list(events or [])
        self.fail = False
        self.search_calls: list[tuple[SearchParams, District | None]] = []
        self.detail_calls: list[str] = []

    async def search_events(self, params, district=None):
        self.search_calls.append((params, district))
        if self.fail:
            raise SourceError("source is down", source=self.name, status_code=503)
        return list(self.events)

    async def get_event(self, event_id):
        self.detail_calls.append(event_id)
        if self.fail:
            raise SourceError("source is down", source=self.name, status_code=503)
        return next((e for e in self.events if e.id == event_id), None)


def make_event(event_id: str = "evt-42", **overrides) -> Event:
    """Build an event with sensible defaults."""
    data = {
        "id": event_id,
        "title_ja": "神田祭り",
        "title_en": "Kanda Festival",
        "description_ja": "江戸三大祭りの一つ",
        "description_en": "One of the three major festivals of Edo",
        "start_date": date(2024, 5, 11),
        "end_date": date(2024, 5, 12),
        "location": "神田明神 (千代田区)",
        "district": "central",
        "image_url": "https://example.com/kanda.jpg",
    }
    data.update(overrides)
    return Event(**data)


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def sample_events() -> list[Event]:
    """A few events across districts."""
    return [
        make_event("evt-42"),
        make_event(
            "evt-43",
            title_ja="渋谷ジャズナイト",
            title_en="Shibuya Jazz Night",
            start_date=date(2024, 5, 15),
            end_date=None,
            district="shinjuku-shibuya",
        ),
    ]


@pytest.fixture
def state() -> AppState:
    """Fresh in-memory state."""
    return AppState()


@pytest.fixture
def event_source(sample_events) -> FakeEventSource:
    return FakeEventSource(sample_events)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def app(state, event_source):
    return create_app(state=state, event_source=event_source)


@pytest_asyncio.fixture
async def client(app):
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def auth_client(client):
    """Client with a registered, logged-in user."""
    response = await client.post(
        "/api/auth/register", json={"username": "alice", "password": "secret1"}
    )
    assert response.status_code == 201
    return client
