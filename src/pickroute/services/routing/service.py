"""Route optimization orchestration: request validation, dispatch and comparison."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import replace
from typing import Sequence

from ...config import settings
from ...models.domain import Location, parse_location, parse_locations
from ...schemas.routing import CompareRequest, RouteRequest
from .distance import DistanceModel, DistanceParameters
from .errors import RouteOptimizationError, ValidationError
from .models import ComparisonResult, OptimizedRoute, RouteLeg, StrategyOutcome
from .strategies import TIE_BREAK_PRIORITY, Algorithm, execute_strategy, parse_algorithm, select_algorithm

logger = logging.getLogger(__name__)


def build_parameters(payload: CompareRequest, base: DistanceParameters | None = None) -> DistanceParameters:
    base = base or DistanceParameters()
    overrides = payload.layout
    if overrides is None:
        return base
    changes = {
        name: tuple(value) if name == "zone_crossover_aisles" else value
        for name, value in overrides.model_dump(exclude_none=True).items()
    }
    return replace(base, **changes)


def _validate_locations(payload: CompareRequest) -> tuple[list[Location], Location]:
    """Parse and check the pick list and start point; raises before any routing work."""

    codes = payload.locations
    if len(codes) < settings.min_locations:
        raise ValidationError(f"At least {settings.min_locations} locations are required, got {len(codes)}.")
    if len(codes) > settings.max_locations:
        raise ValidationError(f"At most {settings.max_locations} locations are allowed, got {len(codes)}.")
    if not payload.start_point:
        raise ValidationError("startPoint is required.")

    locations = parse_locations(codes)
    start = parse_location(payload.start_point)

    distinct = {location.key for location in locations}
    if len(distinct) < settings.min_locations:
        raise ValidationError(
            f"At least {settings.min_locations} distinct locations are required, got {len(distinct)}."
        )
    return locations, start


def _build_legs(
    start: Location,
    path: Sequence[Location],
    model: DistanceModel,
    *,
    return_to_start: bool,
) -> list[RouteLeg]:
    stops = [start, *path]
    if return_to_start:
        stops.append(start)
    legs: list[RouteLeg] = []
    for sequence, (origin, destination) in enumerate(zip(stops, stops[1:]), start=1):
        meters = model.distance(origin, destination)
        legs.append(
            RouteLeg(
                sequence=sequence,
                from_location=origin.code,
                to_location=destination.code,
                distance_meters=round(meters, 2),
                travel_time_minutes=round(model.travel_minutes(meters), 2),
            )
        )
    return legs


def _run_strategy(
    algorithm: Algorithm,
    codes: Sequence[str],
    locations: Sequence[Location],
    start: Location,
    model: DistanceModel,
    *,
    return_to_start: bool,
) -> OptimizedRoute:
    started = time.perf_counter()
    result = execute_strategy(algorithm, locations, start, model, return_to_start=return_to_start)
    elapsed_ms = (time.perf_counter() - started) * 1000

    meters = model.path_distance(start, result.path, return_to_start=return_to_start)
    metadata = {"exact": False, **result.metadata, "elapsed_ms": round(elapsed_ms, 3)}
    return OptimizedRoute(
        locations=list(codes),
        optimized_path=result.codes(),
        total_distance_meters=meters,
        estimated_time_minutes=model.estimated_time_minutes(meters, len(result.path)),
        algorithm=algorithm.value,
        start_point=start.code,
        return_to_start=return_to_start,
        legs=_build_legs(start, result.path, model, return_to_start=return_to_start),
        metadata=metadata,
    )


def optimize_route(payload: RouteRequest, parameters: DistanceParameters | None = None) -> OptimizedRoute:
    """Validate ``payload`` and run exactly one strategy over it."""

    locations, start = _validate_locations(payload)
    auto_selected = payload.algorithm is None
    algorithm = select_algorithm(locations) if auto_selected else parse_algorithm(payload.algorithm)
    model = DistanceModel(build_parameters(payload, parameters))

    route = _run_strategy(
        algorithm,
        payload.locations,
        locations,
        start,
        model,
        return_to_start=payload.return_to_start,
    )
    route.metadata["auto_selected"] = auto_selected
    logger.info(
        f"Route optimization completed in {route.metadata['elapsed_ms']:.1f}ms using {algorithm.value} "
        f"({len(locations)} locations, {route.total_distance_meters:.2f}m)"
    )
    return route


def _pick_best(outcomes: Sequence[StrategyOutcome]) -> StrategyOutcome | None:
    priority = {algorithm.value: index for index, algorithm in enumerate(TIE_BREAK_PRIORITY)}
    candidates = [outcome for outcome in outcomes if outcome.succeeded]
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda outcome: (outcome.route.total_distance_meters, priority[outcome.algorithm]),
    )


def compare_routes(
    payload: CompareRequest,
    parameters: DistanceParameters | None = None,
    *,
    timeout_seconds: float | None = None,
) -> ComparisonResult:
    """Run every strategy on the same input and rank them by distance.

    Strategies run side by side in a thread pool. A strategy that raises or
    misses the deadline is reported with an ``error`` instead of a route; the
    other results are still returned.
    """

    locations, start = _validate_locations(payload)
    model = DistanceModel(build_parameters(payload, parameters))
    timeout = timeout_seconds if timeout_seconds is not None else settings.request_timeout_seconds

    started = time.perf_counter()
    executor = ThreadPoolExecutor(max_workers=settings.compare_max_workers)
    try:
        futures: dict[Algorithm, Future] = {
            algorithm: executor.submit(
                _run_strategy,
                algorithm,
                payload.locations,
                locations,
                start,
                model,
                return_to_start=payload.return_to_start,
            )
            for algorithm in Algorithm
        }
        wait(futures.values(), timeout=timeout)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    outcomes: list[StrategyOutcome] = []
    for algorithm, future in futures.items():
        codes = list(payload.locations)
        if future.cancelled() or not future.done():
            logger.warning(f"Algorithm {algorithm.value} did not finish within {timeout}s")
            outcomes.append(
                StrategyOutcome(algorithm.value, codes, error=f"Timed out after {timeout} seconds")
            )
            continue
        try:
            outcomes.append(StrategyOutcome(algorithm.value, codes, route=future.result()))
        except RouteOptimizationError as exc:
            logger.warning(f"Algorithm {algorithm.value} failed: {exc}")
            outcomes.append(StrategyOutcome(algorithm.value, codes, error=str(exc)))
        except Exception as exc:
            logger.exception(f"Algorithm {algorithm.value} failed unexpectedly: {exc}")
            outcomes.append(StrategyOutcome(algorithm.value, codes, error=f"Algorithm failed: {exc}"))

    best = _pick_best(outcomes)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Route comparison completed in {elapsed_ms:.1f}ms for {len(locations)} locations; "
        f"best={best.algorithm if best else None}"
    )
    return ComparisonResult(
        outcomes=outcomes,
        best=best.algorithm if best else None,
        best_distance=best.route.total_distance_meters if best else 0,
        best_time=best.route.estimated_time_minutes if best else 0,
        metadata={"elapsed_ms": round(elapsed_ms, 3), "failed": [o.algorithm for o in outcomes if not o.succeeded]},
    )
