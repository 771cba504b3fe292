"""Fixed zone-type catalog and mission option lists."""

from __future__ import annotations

from typing import Dict, List

from .models import OptionDef, ZoneTypeDef

ZONE_TYPES: List[ZoneTypeDef] = [
    ZoneTypeDef(id="sleep", name="Sleep Quarters", icon="🛏", color="#3B82F6", min_area=40, category="Life Support"),
    ZoneTypeDef(id="hygiene", name="Hygiene", icon="🚿", color="#06B6D4", min_area=10, category="Life Support"),
    ZoneTypeDef(id="food", name="Food Prep", icon="🍽", color="#10B981", min_area=10, category="Life Support"),
    ZoneTypeDef(id="exercise", name="Exercise", icon="🏃", color="#F59E0B", min_area=8, category="Life Support"),
    ZoneTypeDef(id="medical", name="Medical", icon="💊", color="#EF4444", min_area=5, category="Operations"),
    ZoneTypeDef(id="maintenance", name="Maintenance", icon="🔧", color="#8B5CF6", min_area=15, category="Operations"),
    ZoneTypeDef(id="storage", name="Storage", icon="📦", color="#6366F1", min_area=20, category="Operations"),
    ZoneTypeDef(
        id="environmental",
        name="Environmental Control",
        icon="🌡",
        color="#14B8A6",
        min_area=12,
        category="Systems",
    ),
    ZoneTypeDef(id="recreation", name="Recreation", icon="🎮", color="#EC4899", min_area=8, category="Life Support"),
    ZoneTypeDef(id="command", name="Command Center", icon="🖥", color="#0EA5E9", min_area=10, category="Operations"),
]

ZONE_TYPES_BY_ID: Dict[str, ZoneTypeDef] = {zone_type.id: zone_type for zone_type in ZONE_TYPES}

DESTINATIONS: List[OptionDef] = [
    OptionDef(id="moon", name="Moon", duration="14-30 days", icon="🌙"),
    OptionDef(id="mars", name="Mars", duration="500-700 days", icon="🔴"),
    OptionDef(id="transit", name="Transit", duration="180-300 days", icon="🚀"),
]

HABITAT_TYPES: List[OptionDef] = [
    OptionDef(id="metallic", name="Metallic (Rigid)", desc="Durable, predictable structure"),
    OptionDef(id="inflatable", name="Inflatable", desc="Lightweight, expandable volume"),
    OptionDef(id="surface", name="Surface-Built", desc="In-situ construction, radiation shielding"),
]


def get_zone_type(type_id: str, catalog: List[ZoneTypeDef] | None = None) -> ZoneTypeDef:
    """Look up a zone type by id; raises ``KeyError`` for unknown ids."""

    if catalog is None:
        return ZONE_TYPES_BY_ID[type_id]
    for zone_type in catalog:
        if zone_type.id == type_id:
            return zone_type
    raise KeyError(type_id)


def catalog_payload() -> Dict[str, object]:
    return {
        "zoneTypes": [zone_type.model_dump(by_alias=True) for zone_type in ZONE_TYPES],
        "destinations": [option.model_dump(exclude_none=True) for option in DESTINATIONS],
        "habitatTypes": [option.model_dump(exclude_none=True) for option in HABITAT_TYPES],
    }
