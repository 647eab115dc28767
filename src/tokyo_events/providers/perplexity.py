"""Perplexity event source.

## API Documentation Summary
Source: https://docs.perplexity.ai/api-reference/chat-completions

## Endpoint
- URL: https://api.perplexity.ai/chat/completions
- Method: POST, OpenAI-compatible chat completion body

## Authentication
- Bearer token in the Authorization header (PERPLEXITY_API_KEY)

## Structured Output
Requests carry `response_format` of type `json_schema`, so the message
content is a JSON document matching our schema:

| Request | Content shape |
|---------|---------------|
| search | `{"events": [Event, ...]}` |
| detail | `{"event": Event}` or `{"event": null}` |

Event fields use the camelCase names of `tokyo_events.models.event.Event`
(`titleJa`, `titleEn`, `descriptionJa`, `descriptionEn`, `startDate`,
`endDate`, `location`, `district`, `imageUrl`).

The content is parsed strictly. Prose around the JSON, a missing key, or an
event with the wrong shape is a `SourceResponseError`; nothing is scraped
out of free text.

## Response Format
```json
{
  "id": "...",
  "model": "sonar",
  "choices": [
    {"index": 0, "message": {"role": "assistant", "content": "{\\"events\\": [...]}"}}
  ]
}
```
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from tokyo_events.models.district import District
from tokyo_events.models.event import Event, SearchParams
from tokyo_events.providers.base import EventSource, SourceResponseError

logger = logging.getLogger(__name__)

SEARCH_MAX_TOKENS = 4000
DETAIL_MAX_TOKENS = 2500
TEMPERATURE = 0.2

SEARCH_SYSTEM_PROMPT = (
    "You are a helpful assistant that provides accurate information about events "
    "in Tokyo, Japan. Answer only with JSON matching the requested schema. "
    "Provide as many events as possible, aiming for at least 30-50 events."
)

DETAIL_SYSTEM_PROMPT = (
    "You are a helpful assistant that provides accurate and detailed information "
    "about events in Tokyo, Japan. Answer only with JSON matching the requested "
    "schema. Provide rich, detailed descriptions."
)

EVENT_CATEGORIES_JA = (
    "コンサート、ライブ、音楽フェスティバル",
    "美術展、博物館特別展示",
    "伝統的な日本の祭り、イベント",
    "食のイベント、グルメフェスティバル",
    "スポーツイベント",
    "ポップカルチャーイベント（アニメ、ゲーム関連）",
    "マーケット、フリーマーケット",
    "ワークショップ、セミナー",
    "季節の行事（花見、紅葉狩りなど）",
    "展示会、見本市",
)


class ChatMessage(BaseModel):
    role: str = "assistant"
    content: str | None = None


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatCompletion(BaseModel):
    """The parts of a chat completion reply we rely on."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice]


class EventSearchResult(BaseModel):
    events: list[Event]


class EventDetailResult(BaseModel):
    event: Event | None


def _event_schema() -> dict[str, Any]:
    return Event.model_json_schema(by_alias=True)


def _search_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"events": {"type": "array", "items": _event_schema()}},
        "required": ["events"],
    }


def _detail_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"event": {"anyOf": [_event_schema(), {"type": "null"}]}},
        "required": ["event"],
    }


def build_search_prompt(params: SearchParams, district: District | None) -> str:
    """Build the Japanese search query sent to the model."""
    area = f"地域: {district.name_ja}" if district else "全地域"
    categories = "\n".join(f"- {category}" for category in EVENT_CATEGORIES_JA)

    return (
        "東京都のイベント情報を網羅的に検索します。"
        "できるだけ多くのイベント（少なくとも20-30個、可能であれば50-60個）を見つけてください。\n"
        f"日付範囲: {params.date_from.isoformat()} から {params.date_to.isoformat()} まで\n"
        f"{area}\n\n"
        f"対象となるイベントタイプ:\n{categories}\n\n"
        "結果は指定されたJSONスキーマの events 配列として返してください。"
        "各イベントには一意の id を付け、titleJa/titleEn と descriptionJa/descriptionEn を"
        "日本語と英語の両方で記入してください。日付は YYYY-MM-DD 形式、"
        "1日のみのイベントの endDate は null にしてください。"
    )


def build_detail_prompt(event_id: str) -> str:
    """Build the Japanese detail query sent to the model."""
    return (
        f"以下のIDを持つ東京のイベント情報を詳細に教えてください: {event_id}\n\n"
        "結果は指定されたJSONスキーマの event として返し、id は "
        f'"{event_id}" にしてください。'
        "日付は YYYY-MM-DD 形式、1日のみのイベントの endDate は null にしてください。"
        "該当するイベントが見つからない場合は event を null にしてください。"
    )


class PerplexityEventSource(EventSource):
    """Event source backed by the Perplexity chat completion API."""

    name = "perplexity"
    base_url = "https://api.perplexity.ai"
    requires_api_key = True

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "sonar",
        base_url: str | None = None,
        timeout: float = 60.0,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            api_key=api_key,
            timeout=timeout,
            max_attempts=max_attempts,
            transport=transport,
        )
        self.model = model
        if base_url:
            self.base_url = base_url.rstrip("/")

        if not api_key:
            logger.warning("PERPLEXITY_API_KEY is not set. Event searches will fail.")

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    async def search_events(
        self,
        params: SearchParams,
        district: District | None = None,
    ) -> list[Event]:
        content = await self._complete(
            system_prompt=SEARCH_SYSTEM_PROMPT,
            user_prompt=build_search_prompt(params, district),
            schema=_search_schema(),
            max_tokens=SEARCH_MAX_TOKENS,
        )

        try:
            result = EventSearchResult.model_validate_json(content)
        except ValidationError as e:
            raise SourceResponseError(
                f"Search reply does not match the event schema: {e.error_count()} errors",
                source=self.name,
                response_body=content,
            ) from e

        logger.info(f"{self.name} returned {len(result.events)} events")
        return result.events

    async def get_event(self, event_id: str) -> Event | None:
        content = await self._complete(
            system_prompt=DETAIL_SYSTEM_PROMPT,
            user_prompt=build_detail_prompt(event_id),
            schema=_detail_schema(),
            max_tokens=DETAIL_MAX_TOKENS,
        )

        try:
            result = EventDetailResult.model_validate_json(content)
        except ValidationError as e:
            raise SourceResponseError(
                f"Detail reply does not match the event schema: {e.error_count()} errors",
                source=self.name,
                response_body=content,
            ) from e

        event = result.event
        if event is not None and event.id != event_id:
            logger.debug(f"Source answered with id {event.id} for {event_id}")
            event = event.model_copy(update={"id": event_id})

        return event

    async def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        schema: dict[str, Any],
        max_tokens: int,
    ) -> str:
        """Run a chat completion and return the message content."""
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": max_tokens,
            "response_format": {
                "type": "json_schema",
                "json_schema": {"schema": schema},
            },
        }

        response = await self._post(self.completions_url, payload)

        try:
            completion = ChatCompletion.model_validate_json(response.content)
        except ValidationError as e:
            raise SourceResponseError(
                "Unexpected chat completion format",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise SourceResponseError(
                "No content in chat completion",
                source=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return content
