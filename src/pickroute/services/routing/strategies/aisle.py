"""Aisle-by-aisle (S-shape) traversal."""

from __future__ import annotations

from typing import Sequence

from ....models.domain import Location
from .base import PathResult, RouteStrategy


class AisleByAisleRouting(RouteStrategy):
    """Serpentine sweep: aisles in zone/aisle order, alternating shelf direction."""

    name = "aisle"

    def optimize(self, locations: Sequence[Location], start: Location) -> PathResult:
        groups: dict[tuple[str, int], list[Location]] = {}
        for location in locations:
            groups.setdefault((location.zone, location.aisle), []).append(location)

        path: list[Location] = []
        for index, key in enumerate(sorted(groups)):
            # sorted() is stable in both directions, so equal shelves keep their input order
            path.extend(sorted(groups[key], key=lambda loc: loc.shelf, reverse=index % 2 == 1))

        return PathResult(
            path,
            metadata={"exact": False, "method": "s_shape", "aisles_visited": len(groups)},
        )
