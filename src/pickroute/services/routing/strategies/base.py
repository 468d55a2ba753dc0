"""Base classes for pick-route strategy implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ....models.domain import Location
from ..distance import DistanceModel


class RouteStrategy(ABC):
    """Contract for route strategy implementations.

    ``optimize`` returns a permutation of ``locations``. The start point is the
    implicit origin of the walk and never appears in the returned path.
    """

    name: str = ""

    def __init__(self, distance_model: DistanceModel | None = None) -> None:
        self.distance_model = distance_model or DistanceModel()

    @abstractmethod
    def optimize(self, locations: Sequence[Location], start: Location) -> "PathResult":
        raise NotImplementedError


class PathResult:
    """Container for a visiting order and how it was produced."""

    def __init__(self, path: list[Location], metadata: dict | None = None):
        self.path = path
        self.metadata = metadata or {}

    def codes(self) -> list[str]:
        return [location.code for location in self.path]


def group_duplicates(locations: Sequence[Location]) -> tuple[list[Location], dict[tuple[str, int, int], list[Location]]]:
    """Split ``locations`` into first occurrences and every copy of each slot.

    Revisiting the same slot costs nothing, so solvers can work on unique
    slots and expand the copies back in place afterwards.
    """

    unique: list[Location] = []
    copies: dict[tuple[str, int, int], list[Location]] = {}
    for location in locations:
        bucket = copies.setdefault(location.key, [])
        if not bucket:
            unique.append(location)
        bucket.append(location)
    return unique, copies


def expand_duplicates(
    order: Sequence[Location],
    copies: dict[tuple[str, int, int], list[Location]],
) -> list[Location]:
    path: list[Location] = []
    for location in order:
        path.extend(copies[location.key])
    return path
