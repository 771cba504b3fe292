"""Metric and scoring utilities."""

from __future__ import annotations

import math
from typing import Sequence

from .catalog import ZONE_TYPES
from .constraints import (
    allocated_area,
    allocation_by_type,
    constraint_alerts,
    constraints_summary,
    validate_design,
    zone_area,
    zone_status,
)
from .models import (
    DesignEvaluation,
    HabitatCapacity,
    HabitatConfig,
    ScoreBreakdown,
    ScoreWeights,
    Zone,
    ZoneReport,
    ZoneTypeDef,
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _coverage(zones: Sequence[Zone], catalog: Sequence[ZoneTypeDef]) -> float:
    # Counts placed zones, not distinct types, so duplicates inflate coverage.
    if not catalog:
        return 0.0
    return min(len(zones) / len(catalog) * 100, 100.0)


def _efficiency(zones: Sequence[Zone], total_floor_area: float) -> float:
    if total_floor_area <= 0:
        return 0.0
    return min(allocated_area(zones) / total_floor_area * 100, 100.0)


def _compliance(zones: Sequence[Zone], catalog: Sequence[ZoneTypeDef]) -> float:
    index = {zone_type.id: zone_type for zone_type in catalog}
    ok = sum(1 for zone in zones if zone_status(zone, index[zone.type]) == "ok")
    return ok / max(len(zones), 1) * 100


def score_breakdown(
    zones: Sequence[Zone],
    catalog: Sequence[ZoneTypeDef],
    total_floor_area: float,
    weights: ScoreWeights | None = None,
) -> ScoreBreakdown:
    """Coverage, efficiency and compliance sub-scores with their weighted total."""

    weights = weights or ScoreWeights()
    coverage = _coverage(zones, catalog)
    efficiency = _efficiency(zones, total_floor_area)
    compliance = _compliance(zones, catalog)
    score = _round_half_up(
        coverage * weights.w_coverage
        + efficiency * weights.w_efficiency
        + compliance * weights.w_compliance
    )
    return ScoreBreakdown(
        coverage=coverage,
        efficiency=efficiency,
        compliance=compliance,
        score=score,
        stars=score // 20,
    )


def mission_score(
    zones: Sequence[Zone],
    catalog: Sequence[ZoneTypeDef],
    total_floor_area: float,
) -> int:
    """Mission success score in [0, 100]."""

    return score_breakdown(zones, catalog, total_floor_area).score


def evaluate(
    config: HabitatConfig,
    zones: Sequence[Zone],
    catalog: Sequence[ZoneTypeDef] = ZONE_TYPES,
    weights: ScoreWeights | None = None,
) -> DesignEvaluation:
    """Compute every derived metric for a design."""

    index = {zone_type.id: zone_type for zone_type in catalog}
    summary = constraints_summary(zones, catalog)
    capacity = HabitatCapacity(
        total_volume=config.total_volume,
        total_area=config.total_area,
        volume_per_crew=config.volume_per_crew,
    )
    reports = [
        ZoneReport(
            id=zone.id,
            type=zone.type,
            area=zone_area(zone),
            status=zone_status(zone, index[zone.type]),
        )
        for zone in zones
    ]
    return DesignEvaluation(
        capacity=capacity,
        zones=reports,
        allocation=allocation_by_type(zones, catalog),
        summary=summary,
        alerts=constraint_alerts(zones, catalog),
        breakdown=score_breakdown(zones, catalog, config.total_area, weights),
        area_per_crew=summary.allocated_total / config.crew_size,
        validation=validate_design(config, zones, catalog),
    )
