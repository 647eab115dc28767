"""District catalog.

The catalog is seeded once from `DEFAULT_DISTRICTS` and is read-only for
the rest of the process lifetime.

## Seed Data

| value | parent_area | display_order |
|-------|-------------|---------------|
| central | 23区 | 1 |
| shinjuku-shibuya | 23区 | 2 |
| ikebukuro-ueno | 23区 | 3 |
| south | 23区 | 4 |
| north-east | 23区 | 5 |
| tama-west | 多摩地域 | 6 |
| tama-south | 多摩地域 | 7 |
| tama-north | 多摩地域 | 8 |
"""

from __future__ import annotations

import threading
from typing import Iterable, TypedDict

from tokyo_events.models.district import District
from tokyo_events.storage.errors import DistrictExistsError

INNER_WARDS = "23区"
TAMA_REGION = "多摩地域"


class DistrictSeed(TypedDict):
    name_ja: str
    name_en: str
    parent_area: str
    display_order: int
    value: str


DEFAULT_DISTRICTS: tuple[DistrictSeed, ...] = (
    # 23 wards
    {
        "name_ja": "都心エリア (千代田区、中央区、港区)",
        "name_en": "Central Area (Chiyoda, Chuo, Minato)",
        "parent_area": INNER_WARDS,
        "display_order": 1,
        "value": "central",
    },
    {
        "name_ja": "新宿・渋谷エリア (新宿区、渋谷区)",
        "name_en": "Shinjuku & Shibuya Area",
        "parent_area": INNER_WARDS,
        "display_order": 2,
        "value": "shinjuku-shibuya",
    },
    {
        "name_ja": "池袋・上野エリア (豊島区、台東区)",
        "name_en": "Ikebukuro & Ueno Area",
        "parent_area": INNER_WARDS,
        "display_order": 3,
        "value": "ikebukuro-ueno",
    },
    {
        "name_ja": "城南エリア (品川区、目黒区、大田区)",
        "name_en": "South Area (Shinagawa, Meguro, Ota)",
        "parent_area": INNER_WARDS,
        "display_order": 4,
        "value": "south",
    },
    {
        "name_ja": "城北・城東エリア (その他23区)",
        "name_en": "North & East Area (Other wards)",
        "parent_area": INNER_WARDS,
        "display_order": 5,
        "value": "north-east",
    },
    # Tama region
    {
        "name_ja": "多摩西部 (八王子市、立川市など)",
        "name_en": "Tama West (Hachioji, Tachikawa, etc.)",
        "parent_area": TAMA_REGION,
        "display_order": 6,
        "value": "tama-west",
    },
    {
        "name_ja": "多摩南部 (町田市など)",
        "name_en": "Tama South (Machida, etc.)",
        "parent_area": TAMA_REGION,
        "display_order": 7,
        "value": "tama-south",
    },
    {
        "name_ja": "多摩北部 (府中市など)",
        "name_en": "Tama North (Fuchu, etc.)",
        "parent_area": TAMA_REGION,
        "display_order": 8,
        "value": "tama-north",
    },
)


class DistrictCatalog:
    """In-memory district records keyed by id, unique by `value`."""

    def __init__(self, seed: Iterable[DistrictSeed] | None = DEFAULT_DISTRICTS) -> None:
        self._districts: dict[int, District] = {}
        self._next_id = 1
        self._lock = threading.Lock()

        for entry in seed or ():
            self.add_district(**entry)

    def __len__(self) -> int:
        return len(self._districts)

    def get_all_districts(self) -> list[District]:
        """Get all districts sorted by display order."""
        with self._lock:
            districts = list(self._districts.values())
        return sorted(districts, key=lambda d: d.display_order)

    def get_district_by_value(self, value: str) -> District | None:
        """Get a district by slug, or None."""
        with self._lock:
            districts = list(self._districts.values())
        return next((d for d in districts if d.value == value), None)

    def add_district(
        self,
        name_ja: str,
        name_en: str,
        parent_area: str,
        display_order: int,
        value: str,
    ) -> District:
        """Add a district with the next id.

        Raises:
            DistrictExistsError: If `value` is already in the catalog
        """
        with self._lock:
            if any(d.value == value for d in self._districts.values()):
                raise DistrictExistsError(value)

            district = District(
                id=self._next_id,
                name_ja=name_ja,
                name_en=name_en,
                parent_area=parent_area,
                display_order=display_order,
                value=value,
            )
            self._districts[district.id] = district
            self._next_id += 1

        return district
