"""Factory for route strategies based on the requested algorithm."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from ....config import settings
from ....models.domain import Location
from ..distance import DistanceModel
from ..errors import ValidationError
from .aisle import AisleByAisleRouting
from .base import PathResult, RouteStrategy
from .nearest import NearestNeighborRouting
from .tsp import TravelingSalesmanRouting
from .zone import ZoneClusteredRouting


class Algorithm(str, Enum):
    TSP = "tsp"
    NEAREST = "nearest"
    AISLE = "aisle"
    ZONE = "zone"


# Used to pick a winner when two strategies tie on distance; TSP is the only
# strategy with an optimality guarantee.
TIE_BREAK_PRIORITY: tuple[Algorithm, ...] = (
    Algorithm.TSP,
    Algorithm.ZONE,
    Algorithm.AISLE,
    Algorithm.NEAREST,
)


def parse_algorithm(value: str | Algorithm) -> Algorithm:
    if isinstance(value, Algorithm):
        return value
    try:
        return Algorithm(value)
    except ValueError:
        choices = ", ".join(algorithm.value for algorithm in Algorithm)
        raise ValidationError(f"Unknown algorithm '{value}'. Expected one of: {choices}.") from None


def get_strategy(
    algorithm: Algorithm,
    distance_model: DistanceModel | None = None,
    *,
    return_to_start: bool = False,
) -> RouteStrategy:
    match algorithm:
        case Algorithm.NEAREST:
            return NearestNeighborRouting(distance_model)
        case Algorithm.AISLE:
            return AisleByAisleRouting(distance_model)
        case Algorithm.ZONE:
            return ZoneClusteredRouting(distance_model)
        case Algorithm.TSP:
            return TravelingSalesmanRouting(distance_model, return_to_start=return_to_start)
        case _:
            raise ValidationError(f"Unknown algorithm '{algorithm}'.")


def execute_strategy(
    algorithm: Algorithm,
    locations: Sequence[Location],
    start: Location,
    distance_model: DistanceModel | None = None,
    *,
    return_to_start: bool = False,
) -> PathResult:
    strategy = get_strategy(algorithm, distance_model, return_to_start=return_to_start)
    return strategy.optimize(locations, start)


def select_algorithm(locations: Sequence[Location]) -> Algorithm:
    """Pick a sensible default strategy from the shape of the pick list."""

    distinct = {location.key for location in locations}
    if len(distinct) <= settings.tsp_exact_max_locations:
        return Algorithm.TSP
    if len({location.zone for location in locations}) > 2:
        return Algorithm.ZONE
    if len({(location.zone, location.aisle) for location in locations}) > 3:
        return Algorithm.AISLE
    return Algorithm.NEAREST
