"""Area bookkeeping and constraint checks for habitat zone layouts."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .catalog import ZONE_TYPES, get_zone_type
from .models import (
    PIXELS_PER_SQUARE_METER,
    ConstraintAlert,
    ConstraintsSummary,
    HabitatConfig,
    Status,
    TypeAllocation,
    ValidationResult,
    Zone,
    ZoneTypeDef,
)

WARNING_RATIO = 0.8


def zone_area(zone: Zone) -> float:
    """Floor area of a zone in square metres."""

    return (zone.width * zone.height) / PIXELS_PER_SQUARE_METER


def zone_status(zone: Zone, zone_type: ZoneTypeDef | None = None) -> Status:
    """Compare a single zone against its type minimum.

    ``ok`` at or above the minimum, ``warning`` at or above 80% of it,
    ``error`` below that.
    """

    zone_type = zone_type or get_zone_type(zone.type)
    area = zone_area(zone)
    if area >= zone_type.min_area:
        return "ok"
    if area >= zone_type.min_area * WARNING_RATIO:
        return "warning"
    return "error"


def aggregate_by_type(zones: Iterable[Zone], zone_type: ZoneTypeDef) -> TypeAllocation:
    """Total area placed for one zone type.

    Unlike :func:`zone_status` there is no 80% band here: any placed zone
    short of the minimum is a warning, no zone at all is an error.
    """

    matching = [zone for zone in zones if zone.type == zone_type.id]
    total = sum(zone_area(zone) for zone in matching)
    if total >= zone_type.min_area:
        status: Status = "ok"
    elif matching:
        status = "warning"
    else:
        status = "error"
    return TypeAllocation(
        type_id=zone_type.id,
        count=len(matching),
        total_area=total,
        min_area=zone_type.min_area,
        status=status,
    )


def allocation_by_type(
    zones: Sequence[Zone], catalog: Sequence[ZoneTypeDef] = ZONE_TYPES
) -> List[TypeAllocation]:
    return [aggregate_by_type(zones, zone_type) for zone_type in catalog]


def allocated_area(zones: Iterable[Zone]) -> float:
    return sum(zone_area(zone) for zone in zones)


def constraints_summary(
    zones: Sequence[Zone], catalog: Sequence[ZoneTypeDef] = ZONE_TYPES
) -> ConstraintsSummary:
    present = {zone.type for zone in zones}
    return ConstraintsSummary(
        required_total=sum(zone_type.min_area for zone_type in catalog),
        allocated_total=allocated_area(zones),
        missing_types=[zone_type.id for zone_type in catalog if zone_type.id not in present],
    )


def _catalog_index(catalog: Sequence[ZoneTypeDef]) -> Dict[str, ZoneTypeDef]:
    return {zone_type.id: zone_type for zone_type in catalog}


def constraint_alerts(
    zones: Sequence[Zone], catalog: Sequence[ZoneTypeDef] = ZONE_TYPES
) -> List[ConstraintAlert]:
    """One alert per zone that does not meet its minimum area."""

    index = _catalog_index(catalog)
    alerts: List[ConstraintAlert] = []
    for zone in zones:
        zone_type = index[zone.type]
        status = zone_status(zone, zone_type)
        if status == "ok":
            continue
        area = zone_area(zone)
        deficit = zone_type.min_area - area
        alerts.append(
            ConstraintAlert(
                zone_id=zone.id,
                type_id=zone.type,
                status=status,
                area=area,
                min_area=zone_type.min_area,
                deficit=deficit,
                message=f"{zone_type.name} needs {deficit:.1f} m² more",
            )
        )
    return alerts


def validate_design(
    config: HabitatConfig,
    zones: Sequence[Zone],
    catalog: Sequence[ZoneTypeDef] = ZONE_TYPES,
) -> ValidationResult:
    """Report how a design measures up against the zone requirements."""

    messages: List[str] = []
    failed: List[str] = []
    index = _catalog_index(catalog)
    summary = constraints_summary(zones, catalog)

    # Every zone type represented
    if summary.missing_types:
        failed.append("missing_types")
        names = [index[type_id].name for type_id in summary.missing_types]
        messages.append(f"Missing: {', '.join(names)}.")
    else:
        messages.append(f"All {len(catalog)} zone types present.")

    # Per-zone minimums
    alerts = constraint_alerts(zones, catalog)
    if alerts:
        failed.append("zone_minimums")
        messages.extend(alert.message + "." for alert in alerts)
    else:
        messages.append("All zones meet requirements!")

    # Total placed area against the hull floor area
    floor_area = config.total_area
    if summary.allocated_total > floor_area:
        failed.append("area_budget")
        messages.append(
            f"Allocated {summary.allocated_total:.1f} m² exceeds floor area {floor_area:.1f} m²."
        )
    else:
        messages.append(
            f"Allocated {summary.allocated_total:.1f} m² of {floor_area:.1f} m² floor area."
        )

    return ValidationResult(passed=not failed, messages=messages, failed_rules=failed)
