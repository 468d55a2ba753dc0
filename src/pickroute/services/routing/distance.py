"""Warehouse walking-distance model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Sequence

from ...config import settings
from ...models.domain import Location


@dataclass(frozen=True, slots=True)
class DistanceParameters:
    shelf_spacing_m: float = settings.shelf_spacing_m
    aisle_spacing_m: float = settings.aisle_spacing_m
    zone_transition_distance_m: float = settings.zone_transition_distance_m
    zone_crossover_aisles: tuple[int, ...] = field(default=settings.zone_crossover_aisles)
    walking_speed_m_per_min: float = settings.walking_speed_m_per_min
    per_stop_handling_minutes: float = settings.per_stop_handling_minutes

    def as_dict(self) -> dict:
        return asdict(self)


class DistanceModel:
    """Manhattan-style walking distance between bin locations.

    Pickers walk along aisles and change aisle only at the aisle front, and
    leave a zone through a crossover point before walking the fixed transition
    to the next zone.
    """

    def __init__(self, parameters: DistanceParameters | None = None) -> None:
        self.parameters = parameters or DistanceParameters()
        if not self.parameters.zone_crossover_aisles:
            raise ValueError("At least one zone crossover aisle is required.")

    def distance(self, a: Location, b: Location) -> float:
        p = self.parameters
        if a.zone == b.zone:
            if a.aisle == b.aisle:
                return abs(a.shelf - b.shelf) * p.shelf_spacing_m
            return abs(a.aisle - b.aisle) * p.aisle_spacing_m + (a.shelf + b.shelf) * p.shelf_spacing_m
        return self._to_crossover(a) + p.zone_transition_distance_m + self._to_crossover(b)

    def _to_crossover(self, location: Location) -> float:
        p = self.parameters
        lateral = min(abs(location.aisle - aisle) for aisle in p.zone_crossover_aisles)
        return location.shelf * p.shelf_spacing_m + lateral * p.aisle_spacing_m

    def path_distance(
        self,
        start: Location,
        path: Sequence[Location],
        *,
        return_to_start: bool = False,
    ) -> float:
        """Total metres walked from ``start`` through ``path`` in order."""

        total = 0.0
        current = start
        for location in path:
            total += self.distance(current, location)
            current = location
        if return_to_start and path:
            total += self.distance(current, start)
        return total

    def travel_minutes(self, meters: float) -> float:
        return meters / self.parameters.walking_speed_m_per_min

    def estimated_time_minutes(self, meters: float, stops: int) -> float:
        minutes = self.travel_minutes(meters) + self.parameters.per_stop_handling_minutes * stops
        return round(minutes, 1)

    def matrix(self, nodes: Sequence[Location]) -> list[list[float]]:
        """Symmetric distance matrix over ``nodes``."""

        size = len(nodes)
        result = [[0.0] * size for _ in range(size)]
        for i in range(size):
            for j in range(i + 1, size):
                value = self.distance(nodes[i], nodes[j])
                result[i][j] = value
                result[j][i] = value
        return result

    def coordinates(self, location: Location) -> dict[str, float]:
        """Planar coordinates for display: x along aisles, y by zone, z by shelf."""

        return {
            "x": location.aisle * self.parameters.aisle_spacing_m,
            "y": float(location.zone_index),
            "z": location.shelf * self.parameters.shelf_spacing_m,
        }
