"""Shared base model for client-facing records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes with camelCase field names.

    The browser client speaks camelCase (`titleJa`, `startDate`), while the
    Python side keeps snake_case attributes. Both names are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
