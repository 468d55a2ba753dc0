"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class RouteLeg:
    sequence: int
    from_location: str
    to_location: str
    distance_meters: float
    travel_time_minutes: float


@dataclass(frozen=True, slots=True)
class OptimizedRoute:
    locations: List[str]
    optimized_path: List[str]
    total_distance_meters: float
    estimated_time_minutes: float
    algorithm: str
    start_point: str
    return_to_start: bool = False
    legs: List[RouteLeg] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def exact(self) -> bool:
        return bool(self.metadata.get("exact", False))


@dataclass(frozen=True, slots=True)
class StrategyOutcome:
    """One comparator entry: either a route or the error that replaced it."""

    algorithm: str
    locations: List[str]
    route: Optional[OptimizedRoute] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.route is not None and self.error is None


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    outcomes: List[StrategyOutcome]
    best: Optional[str]
    best_distance: float
    best_time: float
    metadata: dict = field(default_factory=dict)
