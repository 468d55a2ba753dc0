"""Zone-clustered pick routing."""

from __future__ import annotations

from typing import Sequence

from ....models.domain import Location
from .base import PathResult, RouteStrategy


class ZoneClusteredRouting(RouteStrategy):
    """Finish one zone before moving to the next.

    Zones are sequenced greedily: from the current position the zone whose
    entry point (lowest aisle, then lowest shelf) is closest is visited next,
    ties going to the earlier zone letter. Inside a zone locations are walked
    by aisle then shelf ascending.
    """

    name = "zone"

    def optimize(self, locations: Sequence[Location], start: Location) -> PathResult:
        zones: dict[str, list[Location]] = {}
        for location in locations:
            zones.setdefault(location.zone, []).append(location)
        for zone_id in zones:
            zones[zone_id].sort(key=lambda loc: (loc.aisle, loc.shelf))

        path: list[Location] = []
        zone_order: list[str] = []
        current = start
        pending = sorted(zones)
        while pending:
            next_zone = min(
                pending,
                key=lambda zone_id: (self.distance_model.distance(current, zones[zone_id][0]), zone_id),
            )
            pending.remove(next_zone)
            zone_order.append(next_zone)
            path.extend(zones[next_zone])
            current = path[-1]

        return PathResult(
            path,
            metadata={"exact": False, "method": "zone_sweep", "zone_order": zone_order},
        )
