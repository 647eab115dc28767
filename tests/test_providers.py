"""Tests for the Perplexity event source.

All HTTP traffic goes through `httpx.MockTransport`; nothing leaves the
process.
"""

import json
from datetime import date

import httpx
import pytest

from tokyo_events.models import SearchParams
from tokyo_events.providers import PerplexityEventSource, SourceError, SourceResponseError
from tokyo_events.providers.perplexity import build_detail_prompt, build_search_prompt
from tokyo_events.storage import DistrictCatalog

EVENT_JSON = {
    "id": "evt-42",
    "titleJa": "神田祭り",
    "titleEn": "Kanda Festival",
    "descriptionJa": "江戸三大祭りの一つ",
    "descriptionEn": "One of the three major festivals of Edo",
    "startDate": "2024-05-11",
    "endDate": "2024-05-12",
    "location": "神田明神",
    "district": "central",
    "imageUrl": "https://example.com/kanda.jpg",
}


def completion(content: str) -> dict:
    """Wrap message content in a chat completion body."""
    return {
        "id": "cmpl-1",
        "model": "sonar",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


def make_source(handler, **kwargs) -> PerplexityEventSource:
    return PerplexityEventSource(
        api_key="test-key",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.fixture
def params():
    return SearchParams(date_from="2024-05-01", date_to="2024-05-31")


class TestPrompts:
    """Tests for prompt construction."""

    def test_search_prompt_with_district(self, params):
        """Test the district's Japanese name and dates are in the query."""
        district = DistrictCatalog().get_district_by_value("central")
        prompt = build_search_prompt(params, district)

        assert "2024-05-01" in prompt
        assert "2024-05-31" in prompt
        assert "地域: 都心エリア" in prompt

    def test_search_prompt_all_areas(self, params):
        """Test searches without a district ask for all areas."""
        assert "全地域" in build_search_prompt(params, None)

    def test_detail_prompt_names_id(self):
        """Test the detail query carries the id."""
        assert '"evt-42"' in build_detail_prompt("evt-42")


class TestSearchEvents:
    """Tests for search_events."""

    @pytest.mark.asyncio
    async def test_parses_events(self, params):
        """Test a well-formed reply becomes Event models."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=completion(json.dumps({"events": [EVENT_JSON]})))

        async with make_source(handler) as source:
            events = await source.search_events(params)

        assert [e.id for e in events] == ["evt-42"]
        assert events[0].start_date == date(2024, 5, 11)

        request = requests[0]
        assert request.url == "https://api.perplexity.ai/chat/completions"
        assert request.headers["Authorization"] == "Bearer test-key"
        body = json.loads(request.content)
        assert body["model"] == "sonar"
        assert body["max_tokens"] == 4000
        assert body["temperature"] == 0.2
        assert body["response_format"]["type"] == "json_schema"
        assert "events" in body["response_format"]["json_schema"]["schema"]["properties"]

    @pytest.mark.asyncio
    async def test_empty_result(self, params):
        """Test an empty events array is a valid answer."""

        def handler(request):
            return httpx.Response(200, json=completion('{"events": []}'))

        async with make_source(handler) as source:
            assert await source.search_events(params) == []

    @pytest.mark.asyncio
    async def test_prose_around_json_is_rejected(self, params):
        """Test JSON embedded in free text is not scraped out."""
        content = "Here are some events:\n" + json.dumps({"events": [EVENT_JSON]}) + "\nEnjoy!"

        def handler(request):
            return httpx.Response(200, json=completion(content))

        async with make_source(handler) as source:
            with pytest.raises(SourceResponseError):
                await source.search_events(params)

    @pytest.mark.asyncio
    async def test_wrong_event_shape(self, params):
        """Test events missing required fields are rejected."""
        broken = {k: v for k, v in EVENT_JSON.items() if k != "startDate"}

        def handler(request):
            return httpx.Response(200, json=completion(json.dumps({"events": [broken]})))

        async with make_source(handler) as source:
            with pytest.raises(SourceResponseError):
                await source.search_events(params)

    @pytest.mark.asyncio
    async def test_empty_content(self, params):
        """Test a reply without message content is rejected."""

        def handler(request):
            return httpx.Response(200, json=completion(""))

        async with make_source(handler) as source:
            with pytest.raises(SourceResponseError, match="No content"):
                await source.search_events(params)

    @pytest.mark.asyncio
    async def test_http_error(self, params):
        """Test a non-2xx response raises SourceError with its status."""

        def handler(request):
            return httpx.Response(500, text="upstream exploded")

        async with make_source(handler) as source:
            with pytest.raises(SourceError) as exc_info:
                await source.search_events(params)

        assert exc_info.value.status_code == 500
        assert exc_info.value.response_body == "upstream exploded"

    @pytest.mark.asyncio
    async def test_network_error_single_attempt(self, params):
        """Test network failures are wrapped and attempted once by default."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with make_source(handler) as source:
            with pytest.raises(SourceError, match="Request to perplexity failed"):
                await source.search_events(params)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_missing_api_key(self, params):
        """Test a source without a key fails without sending a request."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=completion('{"events": []}'))

        source = PerplexityEventSource(api_key=None, transport=httpx.MockTransport(handler))
        with pytest.raises(SourceError, match="API key is not configured"):
            await source.search_events(params)
        await source.aclose()

        assert calls == []


class TestGetEvent:
    """Tests for get_event."""

    @pytest.mark.asyncio
    async def test_returns_event(self):
        """Test a detail reply becomes an Event."""

        def handler(request):
            body = json.loads(request.content)
            assert body["max_tokens"] == 2500
            return httpx.Response(200, json=completion(json.dumps({"event": EVENT_JSON})))

        async with make_source(handler) as source:
            event = await source.get_event("evt-42")

        assert event is not None
        assert event.title_en == "Kanda Festival"

    @pytest.mark.asyncio
    async def test_null_event(self):
        """Test an explicit null means not found."""

        def handler(request):
            return httpx.Response(200, json=completion('{"event": null}'))

        async with make_source(handler) as source:
            assert await source.get_event("evt-404") is None

    @pytest.mark.asyncio
    async def test_id_is_pinned_to_request(self):
        """Test a reply with another id is stored under the requested id."""

        def handler(request):
            other = dict(EVENT_JSON, id="something-else")
            return httpx.Response(200, json=completion(json.dumps({"event": other})))

        async with make_source(handler) as source:
            event = await source.get_event("evt-42")

        assert event.id == "evt-42"

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        """Test the endpoint follows the configured base URL."""
        urls = []

        def handler(request):
            urls.append(str(request.url))
            return httpx.Response(200, json=completion('{"event": null}'))

        async with make_source(handler, base_url="http://proxy.local/v1/") as source:
            await source.get_event("evt-1")

        assert urls == ["http://proxy.local/v1/chat/completions"]
