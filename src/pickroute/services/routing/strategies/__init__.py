"""Pick-route strategies."""

from .aisle import AisleByAisleRouting
from .base import PathResult, RouteStrategy
from .dispatcher import (
    TIE_BREAK_PRIORITY,
    Algorithm,
    execute_strategy,
    get_strategy,
    parse_algorithm,
    select_algorithm,
)
from .nearest import NearestNeighborRouting
from .tsp import TravelingSalesmanRouting
from .zone import ZoneClusteredRouting

__all__ = [
    "Algorithm",
    "TIE_BREAK_PRIORITY",
    "RouteStrategy",
    "PathResult",
    "NearestNeighborRouting",
    "AisleByAisleRouting",
    "ZoneClusteredRouting",
    "TravelingSalesmanRouting",
    "get_strategy",
    "execute_strategy",
    "parse_algorithm",
    "select_algorithm",
]
