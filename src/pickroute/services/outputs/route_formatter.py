"""Serializers turning routing results into API response models."""

from __future__ import annotations

from dataclasses import asdict

from ...models.domain import parse_location
from ...schemas.routing import (
    ComparisonEntryModel,
    ComparisonModel,
    Coordinates,
    DetailedRouteModel,
    OptimizedRouteModel,
    RouteLegModel,
    WaypointModel,
)
from ..routing.distance import DistanceModel
from ..routing.models import ComparisonResult, OptimizedRoute


def route_to_model(route: OptimizedRoute) -> OptimizedRouteModel:
    return OptimizedRouteModel(
        locations=route.locations,
        optimized_path=route.optimized_path,
        total_distance_meters=round(route.total_distance_meters, 2),
        estimated_time_minutes=route.estimated_time_minutes,
        algorithm=route.algorithm,
        exact=route.exact,
        metadata=route.metadata,
    )


def route_to_detailed_model(route: OptimizedRoute, distance_model: DistanceModel) -> DetailedRouteModel:
    # "end" is only the walk back to the start; every bin is a pickup
    stops = [(route.start_point, "start")]
    stops.extend((code, "pickup") for code in route.optimized_path)
    if route.return_to_start:
        stops.append((route.start_point, "end"))

    waypoints = []
    for sequence, (code, kind) in enumerate(stops):
        waypoints.append(
            WaypointModel(
                location=code,
                type=kind,
                sequence=sequence,
                coordinates=Coordinates(**distance_model.coordinates(parse_location(code))),
            )
        )

    base = route_to_model(route)
    return DetailedRouteModel(
        **base.model_dump(),
        start_point=route.start_point,
        legs=[RouteLegModel(**asdict(leg)) for leg in route.legs],
        waypoints=waypoints,
    )


def comparison_to_model(result: ComparisonResult) -> ComparisonModel:
    entries = []
    for outcome in result.outcomes:
        if outcome.route is None:
            entries.append(
                ComparisonEntryModel(
                    algorithm=outcome.algorithm,
                    locations=outcome.locations,
                    error=outcome.error,
                )
            )
            continue
        entries.append(
            ComparisonEntryModel(
                algorithm=outcome.algorithm,
                locations=outcome.locations,
                optimized_path=outcome.route.optimized_path,
                total_distance_meters=round(outcome.route.total_distance_meters, 2),
                estimated_time_minutes=outcome.route.estimated_time_minutes,
                exact=outcome.route.exact,
            )
        )
    return ComparisonModel(
        comparison=entries,
        best=result.best,
        best_distance=round(result.best_distance, 2),
        best_time=result.best_time,
    )
