"""Event models for search results and favorites."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Self

from pydantic import Field, field_validator, model_validator

from tokyo_events.models.base import CamelModel


# Dates on the wire are strictly YYYY-MM-DD
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Event(CamelModel):
    """An event in Tokyo as returned by the external event source.

    Records are not validated beyond their shape: an event is whatever the
    source last returned for its identifier.
    """

    id: str = Field(..., min_length=1, description="Opaque event identifier")
    title_ja: str = Field(..., description="Title in Japanese")
    title_en: str = Field(..., description="Title in English")
    description_ja: str = Field(default="", description="Description in Japanese")
    description_en: str = Field(default="", description="Description in English")
    start_date: date = Field(..., description="First day of the event")
    end_date: date | None = Field(
        default=None, description="Last day of the event, None for one-day events"
    )
    location: str = Field(default="", description="Venue or area text")
    district: str = Field(
        default="", description="District slug (not checked against the catalog)"
    )
    image_url: str = Field(default="", description="Image URL for the event card")


class SearchParams(CamelModel):
    """Query parameters for an event search.

    Both dates must be given as YYYY-MM-DD and the range must not be
    inverted. An empty district means all areas.
    """

    date_from: date
    date_to: date
    district: str | None = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> Any:
        """Reject anything that is not a YYYY-MM-DD string or a date."""
        if isinstance(v, date):
            return v
        if not isinstance(v, str) or not DATE_PATTERN.match(v):
            raise ValueError("Invalid date format. Please use YYYY-MM-DD format.")
        return v

    @field_validator("district", mode="before")
    @classmethod
    def blank_district_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        """Ensure date_from is not after date_to."""
        if self.date_from > self.date_to:
            raise ValueError("dateFrom must be before or equal to dateTo")
        return self
