from __future__ import annotations

from collections.abc import Mapping
from typing import Any

"""Category resolver: canonical item key -> human readable category."""

__all__ = [
    "DEFAULT_CATEGORY",
    "PUBLIC_HEALTH_CATEGORIES",
    "CategoryResolver",
]

DEFAULT_CATEGORY = "General"

# Public Health Items, Schedule of Standard Rates 2005-06.
PUBLIC_HEALTH_CATEGORIES: Mapping[str, str] = {
    "1": "Labour Rates",
    "2": "Earth Work",
    "3": "Rock Cutting & Blasting",
    "3a": "Rock Cutting & Blasting",
    "3b": "Rock Cutting & Blasting",
    "3c": "Rock Cutting & Blasting",
    "3d": "Rock Cutting & Blasting",
    "3e": "Rock Cutting & Blasting",
    "3f": "Rock Cutting & Blasting",
    "4": "Loading & Unloading",
    "5": "Loading & Unloading",
    "6": "Loading & Unloading",
    "7": "Loading & Unloading",
    "8a": "Pipe Laying",
    "8b": "Pipe Laying",
    "9a": "Pipe Jointing",
    "9b": "Pipe Jointing",
    "10": "Pipe Jointing",
    "11a": "RCC Pipe Laying",
    "11b": "RCC Pipe Laying",
    "12": "GI/PVC/HDPE Pipe Laying",
    "13": "AC Pressure Pipe Laying",
    "14": "AC Pressure Pipe Jointing",
    "15": "Stoneware Pipe Laying",
    "16": "PVC Pipe Laying & Testing",
    "17": "Valve Installation Labour",
    "18a": "Air Valve Labour",
    "18b": "Kinetic Air Valve Labour",
    "19": "Fire Hydrant Labour",
    "20": "CI/DI Pipe Uprooting",
    "21": "RCC Pipe Uprooting",
    "22": "GI/PVC/HDPE Pipe Removal",
    "23": "CI/DI Pipe Cutting",
    "24": "AC Pipe Cutting",
    "25": "Drilling & Tapping",
    "26": "Road Surface Cutting",
    "27": "Dewatering",
    "28": "Shoring & Strutting",
    "29": "Barricading & Watching",
    "30": "Underwater Trench Excavation",
    "31": "Infiltration Gallery",
    "32": "Infiltration Gallery",
    "33": "Centering & Scaffolding",
    "34": "Lift & Delift of Materials",
    "35": "Fixtures Labour",
    "36": "Sanitary Fixtures Labour",
    "37": "Sanitary Fixtures Labour",
    "38": "Sanitary Fixtures Labour",
    "39": "Sanitary Fixtures Labour",
    "40": "Trench Refilling",
    "41a": "Isolated Scattered Works",
    "41b": "Repairs to Mains",
    "42": "Silt & Sludge Removal",
    "43": "Pipe Conveyance",
    "44": "Pipe Conveyance",
    "45": "Pipe Conveyance",
    "46": "Pipe Conveyance",
    "47": "Pipe Conveyance",
    "48": "Well Sinking",
    "49": "Well Sinking",
    "50": "Open Well Excavation",
    "51": "OHSR/ELSR Rates (Kilo Litres)",
    "52": "OHSR/ELSR Rates (Litres)",
    "53": "Rapid Gravity Filtration Plant",
}


class CategoryResolver:
    """Static lookup with a ``"General"`` fallback.

    Lookup order: canonical key, then the raw item number cast to ``str``,
    then the default.
    """

    def __init__(self, table: Mapping[str, str] | None = None, default: str = DEFAULT_CATEGORY) -> None:
        self._table = dict(table or {})
        self.default = default

    def __len__(self) -> int:
        return len(self._table)

    def resolve(self, item_key: str | None, item_no: Any = None) -> str:
        if item_key is not None and item_key in self._table:
            return self._table[item_key]
        if item_no is not None:
            raw = str(item_no)
            if raw in self._table:
                return self._table[raw]
        return self.default
