"""Nearest-neighbour pick-route heuristic."""

from __future__ import annotations

from typing import Sequence

from ....models.domain import Location
from .base import PathResult, RouteStrategy


class NearestNeighborRouting(RouteStrategy):
    """Greedy walk that always steps to the closest unvisited location.

    This is a heuristic: it runs in O(n^2) and is usually good, but gives no
    guarantee of finding the shortest path. Ties go to the location that came
    first in the input.
    """

    name = "nearest"

    def optimize(self, locations: Sequence[Location], start: Location) -> PathResult:
        return PathResult(self.order(locations, start), metadata={"exact": False, "method": "greedy"})

    def order(self, locations: Sequence[Location], start: Location) -> list[Location]:
        remaining = list(locations)
        path: list[Location] = []
        current = start
        while remaining:
            best_index = 0
            best_distance = self.distance_model.distance(current, remaining[0])
            for index in range(1, len(remaining)):
                candidate = self.distance_model.distance(current, remaining[index])
                if candidate < best_distance:
                    best_index = index
                    best_distance = candidate
            current = remaining.pop(best_index)
            path.append(current)
        return path
