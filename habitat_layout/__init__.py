"""Space habitat zone layout package."""

from .models import HabitatConfig, Zone, ZoneTypeDef, Design  # noqa: F401
from .catalog import ZONE_TYPES  # noqa: F401
from .constraints import (  # noqa: F401
    aggregate_by_type,
    constraints_summary,
    validate_design,
    zone_area,
    zone_status,
)
from .scoring import evaluate, mission_score  # noqa: F401
from .session import DesignSession  # noqa: F401

__all__ = [
    "HabitatConfig",
    "Zone",
    "ZoneTypeDef",
    "Design",
    "ZONE_TYPES",
    "zone_area",
    "zone_status",
    "aggregate_by_type",
    "constraints_summary",
    "validate_design",
    "mission_score",
    "evaluate",
    "DesignSession",
]
