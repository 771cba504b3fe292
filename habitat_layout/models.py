"""Core data models for space habitat layouts."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Destination = Literal["moon", "mars", "transit"]
HabitatType = Literal["metallic", "inflatable", "surface"]
ZoneCategory = Literal["Life Support", "Operations", "Systems"]
Status = Literal["ok", "warning", "error"]

# 15 plane units per metre on each axis, so 225 square units per square metre.
PIXELS_PER_METER = 15
PIXELS_PER_SQUARE_METER = PIXELS_PER_METER * PIXELS_PER_METER

# Rough usable floor area per (length x diameter x floor) of hull.
FLOOR_AREA_FACTOR = 2.5


class HabitatConfig(BaseModel):
    """Mission and physical parameters of the habitat."""

    model_config = ConfigDict(populate_by_name=True)

    destination: Destination = "moon"
    crew_size: int = Field(4, ge=1, alias="crewSize")
    duration: int = Field(30, ge=1)
    habitat_type: HabitatType = Field("inflatable", alias="habitatType")
    length: float = 15.0
    diameter: float = 8.0
    floors: int = Field(1, ge=1)

    @property
    def total_volume(self) -> float:
        return math.pi * (self.diameter / 2) ** 2 * self.length

    @property
    def total_area(self) -> float:
        return self.length * self.diameter * self.floors * FLOOR_AREA_FACTOR

    @property
    def volume_per_crew(self) -> float:
        return self.total_volume / self.crew_size

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ZoneTypeDef(BaseModel):
    """Catalog entry describing one functional zone category."""

    id: str
    name: str
    icon: str
    color: str
    min_area: float = Field(..., alias="minArea")
    category: ZoneCategory

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Zone(BaseModel):
    """A rectangular zone placed on the habitat plane."""

    model_config = ConfigDict(extra="allow")

    id: int
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float
    height: float


class TypeAllocation(BaseModel):
    """Area allocated to one zone type across the whole design."""

    type_id: str
    count: int
    total_area: float
    min_area: float
    status: Status


class ConstraintsSummary(BaseModel):
    required_total: float
    allocated_total: float
    missing_types: List[str]

    def to_json(self) -> Dict[str, Any]:
        return {
            "required": self.required_total,
            "allocated": self.allocated_total,
            "missing": list(self.missing_types),
        }


class ConstraintAlert(BaseModel):
    """A zone that falls short of its minimum area."""

    zone_id: int
    type_id: str
    status: Status
    area: float
    min_area: float
    deficit: float
    message: str


class ZoneReport(BaseModel):
    id: int
    type: str
    area: float
    status: Status


class ScoreBreakdown(BaseModel):
    """Weighted sub-scores behind the mission success score."""

    coverage: float
    efficiency: float
    compliance: float
    score: int
    stars: int


class ScoreWeights(BaseModel):
    """Weights for the mission success score."""

    w_coverage: float = 0.4
    w_efficiency: float = 0.3
    w_compliance: float = 0.3


class HabitatCapacity(BaseModel):
    total_volume: float
    total_area: float
    volume_per_crew: float


class ValidationResult(BaseModel):
    """Result set from running constraint checks."""

    passed: bool
    messages: List[str]
    failed_rules: List[str] = Field(default_factory=list)


class DesignEvaluation(BaseModel):
    """Everything the designer panels display for one design."""

    capacity: HabitatCapacity
    zones: List[ZoneReport]
    allocation: List[TypeAllocation]
    summary: ConstraintsSummary
    alerts: List[ConstraintAlert]
    breakdown: ScoreBreakdown
    area_per_crew: float
    validation: ValidationResult

    def to_json(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["summary"] = self.summary.to_json()
        return data


class Design(BaseModel):
    """A habitat configuration together with its zone placements."""

    config: HabitatConfig
    zones: List[Zone] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_json(),
            "zones": [zone.model_dump() for zone in self.zones],
        }


class User(BaseModel):
    """Registered account."""

    id: int
    name: str
    email: str
    password_hash: str
    created_at: str

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    def profile(self) -> Dict[str, Any]:
        return {**self.public(), "createdAt": self.created_at}


class OptionDef(BaseModel):
    """Display option for destination and habitat type pickers."""

    id: str
    name: str
    icon: Optional[str] = None
    duration: Optional[str] = None
    desc: Optional[str] = None
