"""In-session editing of a design's zone list."""

from __future__ import annotations

import logging
import math
import random
import time
from typing import Callable, Dict, List, Optional, Tuple

from .catalog import ZONE_TYPES_BY_ID
from .errors import UnknownZoneTypeError, ZoneNotFoundError
from .models import PIXELS_PER_METER, Design, HabitatConfig, Zone

logger = logging.getLogger(__name__)

MIN_ZONE_SIDE = 50.0
SPAWN_ORIGIN = 100.0
SPAWN_SPREAD = 200.0


def _now_ms() -> int:
    return int(time.time() * 1000)


class DesignSession:
    """Owns the zones of the design currently being edited.

    Zone ids are creation timestamps in milliseconds, bumped when two zones
    are added within the same millisecond.
    """

    def __init__(
        self,
        config: HabitatConfig | None = None,
        zones: List[Zone] | None = None,
        clock: Callable[[], int] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or HabitatConfig()
        self.zones: List[Zone] = list(zones or [])
        self.selected_id: Optional[int] = None
        self._clock = clock or _now_ms
        self._rng = rng or random.Random()
        self._last_id = max((zone.id for zone in self.zones), default=0)

    def _next_id(self) -> int:
        zone_id = max(self._clock(), self._last_id + 1)
        self._last_id = zone_id
        return zone_id

    def get(self, zone_id: int) -> Zone:
        for zone in self.zones:
            if zone.id == zone_id:
                return zone
        raise ZoneNotFoundError(zone_id)

    @property
    def selected(self) -> Optional[Zone]:
        if self.selected_id is None:
            return None
        return self.get(self.selected_id)

    def select(self, zone_id: Optional[int]) -> None:
        if zone_id is not None:
            self.get(zone_id)
        self.selected_id = zone_id

    def add_zone(self, type_id: str) -> Zone:
        """Place a new zone sized exactly to its type's minimum area."""

        zone_type = ZONE_TYPES_BY_ID.get(type_id)
        if zone_type is None:
            raise UnknownZoneTypeError(type_id)
        side = math.sqrt(zone_type.min_area) * PIXELS_PER_METER
        zone = Zone(
            id=self._next_id(),
            type=type_id,
            x=SPAWN_ORIGIN + self._rng.random() * SPAWN_SPREAD,
            y=SPAWN_ORIGIN + self._rng.random() * SPAWN_SPREAD,
            width=side,
            height=side,
        )
        self.zones.append(zone)
        logger.debug("Added %s zone %s", type_id, zone.id)
        return zone

    def move_zone(
        self,
        zone_id: int,
        x: float,
        y: float,
        bounds: Tuple[float, float] | None = None,
    ) -> Zone:
        """Move a zone; with canvas bounds the zone is kept fully inside them."""

        zone = self.get(zone_id)
        if bounds is not None:
            max_x, max_y = bounds[0] - zone.width, bounds[1] - zone.height
            x = max(0.0, min(x, max_x))
            y = max(0.0, min(y, max_y))
        zone.x = x
        zone.y = y
        return zone

    def resize_zone(self, zone_id: int, width: float, height: float) -> Zone:
        zone = self.get(zone_id)
        zone.width = max(MIN_ZONE_SIDE, width)
        zone.height = max(MIN_ZONE_SIDE, height)
        return zone

    def delete_zone(self, zone_id: int) -> None:
        zone = self.get(zone_id)
        self.zones.remove(zone)
        if self.selected_id == zone_id:
            self.selected_id = None
        logger.debug("Deleted zone %s", zone_id)

    def to_design(self) -> Design:
        return Design(config=self.config, zones=list(self.zones))

    def to_payload(self) -> Dict[str, object]:
        return self.to_design().to_json()
