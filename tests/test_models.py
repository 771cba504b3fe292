import math

import pytest
from pydantic import ValidationError

from habitat_layout.catalog import ZONE_TYPES, ZONE_TYPES_BY_ID
from habitat_layout.models import Design, HabitatConfig, Zone


def test_config_accepts_camel_case_payload():
    config = HabitatConfig.model_validate(
        {
            "destination": "mars",
            "crewSize": 6,
            "duration": 600,
            "habitatType": "surface",
            "length": 20,
            "diameter": 10,
            "floors": 2,
        }
    )
    assert config.crew_size == 6
    assert config.habitat_type == "surface"
    assert config.to_json()["crewSize"] == 6


def test_config_derived_capacity():
    config = HabitatConfig(length=15, diameter=8, floors=1)
    assert config.total_area == pytest.approx(300.0)
    assert config.total_volume == pytest.approx(math.pi * 16 * 15)
    assert config.volume_per_crew == pytest.approx(config.total_volume / 4)


def test_config_rejects_unknown_destination():
    with pytest.raises(ValidationError):
        HabitatConfig(destination="venus")


def test_config_rejects_zero_crew():
    with pytest.raises(ValidationError):
        HabitatConfig(crew_size=0)


def test_zone_keeps_extra_fields():
    zone = Zone.model_validate({"id": 1, "type": "sleep", "x": 0, "y": 0, "width": 10, "height": 10, "floor": 1})
    assert zone.model_dump()["floor"] == 1


def test_zone_type_kept_verbatim():
    zone = Zone(id=1, type=" Sleep ", width=10, height=10)
    assert zone.type == " Sleep "


def test_catalog_has_ten_types():
    assert len(ZONE_TYPES) == 10
    assert sum(zone_type.min_area for zone_type in ZONE_TYPES) == 138
    assert ZONE_TYPES_BY_ID["sleep"].min_area == 40


def test_design_to_json_uses_aliases():
    design = Design(config=HabitatConfig(), zones=[Zone(id=1, type="food", width=30, height=30)])
    data = design.to_json()
    assert data["config"]["habitatType"] == "inflatable"
    assert data["zones"][0]["type"] == "food"
