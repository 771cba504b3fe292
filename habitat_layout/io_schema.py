"""JSON schema helpers for import/export."""

from __future__ import annotations

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from .catalog import ZONE_TYPES_BY_ID
from .models import Design, DesignEvaluation, HabitatConfig, Zone


def design_schema() -> Dict[str, Any]:
    return Design.model_json_schema(by_alias=True)


def config_schema() -> Dict[str, Any]:
    return HabitatConfig.model_json_schema(by_alias=True)


def zone_schema() -> Dict[str, Any]:
    return Zone.model_json_schema()


def parse_design(data: Any) -> Design:
    try:
        return Design.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Design payload invalid: {exc}") from exc


def load_design(path: Path | str) -> Design:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    try:
        return Design.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Design file invalid: {exc}") from exc


def save_design(design: Design, path: Path | str) -> None:
    Path(path).write_text(json.dumps(design.to_json(), indent=2, ensure_ascii=False), encoding="utf-8")


def export_markdown(design: Design, evaluation: DesignEvaluation) -> str:
    config = design.config
    lines: list[str] = []
    lines.append("# Habitat Design Summary")
    lines.append("")
    lines.append(f"- Destination: {config.destination}")
    lines.append(f"- Crew: {config.crew_size}")
    lines.append(f"- Duration: {config.duration} days")
    lines.append(f"- Habitat Type: {config.habitat_type}")
    lines.append(f"- Hull: {config.length:g} m x {config.diameter:g} m, {config.floors} floor(s)")
    lines.append("")
    lines.append("## Capacity")
    lines.append(
        f"- Total Volume: {evaluation.capacity.total_volume:.1f} m³\n"
        f"- Floor Area: {evaluation.capacity.total_area:.1f} m²\n"
        f"- Volume per Crew: {evaluation.capacity.volume_per_crew:.1f} m³\n"
    )
    lines.append("## Zones")
    lines.append("| Zone | Type | Area (m²) | Status |")
    lines.append("| --- | --- | --- | --- |")
    for report in evaluation.zones:
        zone_type = ZONE_TYPES_BY_ID.get(report.type)
        label = f"{zone_type.icon} {zone_type.name}" if zone_type else report.type
        lines.append(f"| {report.id} | {label} | {report.area:.1f} | {report.status} |")
    lines.append("")
    lines.append("## Allocation by Type")
    lines.append("| Type | Zones | Allocated (m²) | Required (m²) | Status |")
    lines.append("| --- | --- | --- | --- | --- |")
    for row in evaluation.allocation:
        lines.append(
            f"| {row.type_id} | {row.count} | {row.total_area:.1f} | {row.min_area:g} | {row.status} |"
        )
    lines.append("")
    breakdown = evaluation.breakdown
    stars = "★" * breakdown.stars + "☆" * (5 - breakdown.stars)
    lines.append("## Mission Score")
    lines.append(
        f"- Score: {breakdown.score} {stars}\n"
        f"- Coverage: {breakdown.coverage:.1f}\n"
        f"- Efficiency: {breakdown.efficiency:.1f}\n"
        f"- Compliance: {breakdown.compliance:.1f}\n"
        f"- Area per Crew: {evaluation.area_per_crew:.1f} m²\n"
    )
    lines.append("## Validation")
    for msg in evaluation.validation.messages:
        lines.append(f"- {msg}")
    return "\n".join(lines)


def export_csv(evaluation: DesignEvaluation) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Metric", "Value"])
    for key, value in evaluation.breakdown.model_dump().items():
        writer.writerow([key, value])
    summary = evaluation.summary
    writer.writerow(["required_area", summary.required_total])
    writer.writerow(["allocated_area", summary.allocated_total])
    writer.writerow(["missing_types", " ".join(summary.missing_types)])
    writer.writerow(["area_per_crew", evaluation.area_per_crew])
    return buffer.getvalue()
