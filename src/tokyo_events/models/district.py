"""District models."""

from __future__ import annotations

from pydantic import Field

from tokyo_events.models.base import CamelModel


class District(CamelModel):
    """A geographic grouping of Tokyo used to narrow event searches.

    `value` is the slug clients send as the `district` search parameter.
    `display_order` defines the presentation order of the catalog.
    """

    id: int
    name_ja: str = Field(..., description="Display name in Japanese")
    name_en: str = Field(..., description="Display name in English")
    parent_area: str = Field(..., description="Parent grouping, e.g. 23区")
    display_order: int = Field(..., description="Rank used for stable sorting")
    value: str = Field(..., min_length=1, description="Unique slug")

    def name(self, lang: str = "ja") -> str:
        """Get the display name in the requested language."""
        return self.name_en if lang == "en" else self.name_ja
