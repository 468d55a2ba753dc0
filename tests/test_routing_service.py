import time

import pytest

from pickroute.config import settings
from pickroute.schemas.routing import CompareRequest, RouteRequest, WarehouseLayout
from pickroute.services.routing import service as routing_service
from pickroute.services.routing.errors import AlgorithmError, ParseError, ValidationError
from pickroute.services.routing.models import OptimizedRoute, StrategyOutcome
from pickroute.services.routing.strategies import (
    NearestNeighborRouting,
    TravelingSalesmanRouting,
    ZoneClusteredRouting,
)


def _request(locations, start="A-01-01", algorithm="nearest", **kwargs) -> RouteRequest:
    return RouteRequest(locations=locations, start_point=start, algorithm=algorithm, **kwargs)


def _route(algorithm: str, distance: float) -> OptimizedRoute:
    return OptimizedRoute(
        locations=["A-01-02"],
        optimized_path=["A-01-02"],
        total_distance_meters=distance,
        estimated_time_minutes=1.0,
        algorithm=algorithm,
        start_point="A-01-01",
    )


def test_optimize_route_nearest_scenario():
    route = routing_service.optimize_route(_request(["A-12-08", "A-05-03"]))

    assert route.algorithm == "nearest"
    assert route.locations == ["A-12-08", "A-05-03"]
    assert route.optimized_path == ["A-05-03", "A-12-08"]
    assert route.total_distance_meters == pytest.approx(55.5)
    assert route.estimated_time_minutes > 0
    assert route.metadata["auto_selected"] is False
    assert [leg.to_location for leg in route.legs] == ["A-05-03", "A-12-08"]
    assert sum(leg.distance_meters for leg in route.legs) == pytest.approx(route.total_distance_meters)


def test_optimize_route_accepts_camel_case_fields():
    request = RouteRequest.model_validate(
        {"locations": ["A-05-03", "A-12-08"], "startPoint": "A-01-01", "algorithm": "tsp", "returnToStart": True}
    )
    route = routing_service.optimize_route(request)

    assert route.return_to_start is True
    assert route.total_distance_meters == pytest.approx(55.5 + 46.5)
    assert route.exact is True
    assert route.legs[-1].to_location == "A-01-01"


def test_optimize_route_auto_selects_algorithm():
    request = RouteRequest(locations=["A-05-03", "B-02-01", "A-12-08"], start_point="A-01-01")
    route = routing_service.optimize_route(request)

    assert route.algorithm == "tsp"
    assert route.metadata["auto_selected"] is True


def test_optimize_route_applies_layout_overrides():
    request = _request(
        ["A-05-03", "A-12-08"],
        layout=WarehouseLayout(shelf_spacing_m=1.0, aisle_spacing_m=1.0),
    )
    route = routing_service.optimize_route(request)

    # start leg 4 + 4, then 7 + 11
    assert route.total_distance_meters == pytest.approx(26.0)


@pytest.mark.parametrize(
    "locations",
    [
        ["A-01-02"],
        ["A-01-02", "A-01-02"],
        ["A-01-02", "A-1-02"],
        [],
    ],
)
def test_optimize_route_requires_two_distinct_locations(locations):
    with pytest.raises(ValidationError):
        routing_service.optimize_route(_request(locations))


def test_optimize_route_rejects_too_many_locations():
    locations = [f"A-{aisle:02d}-{shelf:02d}" for aisle in range(1, 6) for shelf in range(1, 12)]
    assert len(locations) > settings.max_locations

    with pytest.raises(ValidationError):
        routing_service.optimize_route(_request(locations))


def test_optimize_route_rejects_unknown_algorithm():
    with pytest.raises(ValidationError) as excinfo:
        routing_service.optimize_route(_request(["A-01-02", "A-02-02"], algorithm="random"))

    assert "random" in str(excinfo.value)


@pytest.mark.parametrize("start", [None, ""])
def test_optimize_route_requires_start_point(start):
    with pytest.raises(ValidationError):
        routing_service.optimize_route(_request(["A-01-02", "A-02-02"], start=start))


def test_malformed_location_is_rejected_before_any_strategy_runs(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("strategy must not run")

    monkeypatch.setattr(routing_service, "execute_strategy", fail)

    with pytest.raises(ParseError) as excinfo:
        routing_service.optimize_route(_request(["A-01-02", "A-1-1"]))
    assert excinfo.value.code == "A-1-1"

    with pytest.raises(ParseError):
        routing_service.optimize_route(_request(["A-01-02", "A-02-02"], start="DEPOT"))


def test_optimize_route_results_are_non_negative_for_every_algorithm():
    locations = ["B-03-04", "A-07-12", "C-01-01", "A-02-02", "B-03-04"]
    for algorithm in ("nearest", "tsp", "aisle", "zone"):
        route = routing_service.optimize_route(_request(locations, algorithm=algorithm))
        assert route.total_distance_meters >= 0
        assert route.estimated_time_minutes >= 0
        assert sorted(route.optimized_path) == sorted(locations)


def test_compare_routes_reports_minimum_distance():
    locations = ["B-03-04", "A-07-12", "C-01-01", "A-02-02"]
    result = routing_service.compare_routes(CompareRequest(locations=locations, start_point="A-01-01"))

    assert [outcome.algorithm for outcome in result.outcomes] == ["tsp", "nearest", "aisle", "zone"]
    individual = {
        algorithm: routing_service.optimize_route(_request(locations, algorithm=algorithm))
        for algorithm in ("tsp", "nearest", "aisle", "zone")
    }
    assert result.best_distance == min(route.total_distance_meters for route in individual.values())
    assert result.best == "tsp"
    assert result.best_time == individual["tsp"].estimated_time_minutes
    assert all(outcome.error is None for outcome in result.outcomes)


def test_compare_routes_prefers_tsp_on_ties():
    result = routing_service.compare_routes(CompareRequest(locations=["A-01-02", "A-01-05"], start_point="A-01-01"))

    distances = {outcome.route.total_distance_meters for outcome in result.outcomes}
    assert distances == {6.0}
    assert result.best == "tsp"


def test_pick_best_uses_priority_order_between_equal_distances():
    outcomes = [
        StrategyOutcome("tsp", [], error="boom"),
        StrategyOutcome("nearest", [], route=_route("nearest", 10.0)),
        StrategyOutcome("aisle", [], route=_route("aisle", 10.0)),
        StrategyOutcome("zone", [], route=_route("zone", 10.0)),
    ]

    assert routing_service._pick_best(outcomes).algorithm == "zone"
    assert routing_service._pick_best(outcomes[:3]).algorithm == "aisle"
    assert routing_service._pick_best(outcomes[:1]) is None


def test_compare_routes_isolates_failing_strategy(monkeypatch):
    def fail(self, locations, start):
        raise AlgorithmError("tsp", "TSP input exceeds ceiling")

    monkeypatch.setattr(TravelingSalesmanRouting, "optimize", fail)

    result = routing_service.compare_routes(
        CompareRequest(locations=["B-03-04", "A-07-12", "C-01-01"], start_point="A-01-01")
    )

    outcomes = {outcome.algorithm: outcome for outcome in result.outcomes}
    assert outcomes["tsp"].error == "TSP input exceeds ceiling"
    assert outcomes["tsp"].route is None
    assert result.best in {"nearest", "aisle", "zone"}
    assert result.best_distance == min(
        outcome.route.total_distance_meters for outcome in result.outcomes if outcome.succeeded
    )
    assert result.metadata["failed"] == ["tsp"]


def test_compare_routes_records_unexpected_errors(monkeypatch):
    def explode(self, locations, start):
        raise RuntimeError("zone layout missing")

    monkeypatch.setattr(ZoneClusteredRouting, "optimize", explode)

    result = routing_service.compare_routes(CompareRequest(locations=["A-01-02", "B-01-02"], start_point="A-01-01"))

    zone = next(outcome for outcome in result.outcomes if outcome.algorithm == "zone")
    assert zone.error == "Algorithm failed: zone layout missing"
    assert result.best is not None


def test_compare_routes_reports_no_best_when_all_fail(monkeypatch):
    def fail(self, locations, start):
        raise AlgorithmError(self.name, f"{self.name} failed")

    from pickroute.services.routing.strategies import AisleByAisleRouting

    for strategy in (TravelingSalesmanRouting, NearestNeighborRouting, AisleByAisleRouting, ZoneClusteredRouting):
        monkeypatch.setattr(strategy, "optimize", fail)

    result = routing_service.compare_routes(CompareRequest(locations=["A-01-02", "B-01-02"], start_point="A-01-01"))

    assert result.best is None
    assert result.best_distance == 0
    assert result.best_time == 0
    assert [outcome.error for outcome in result.outcomes] == [
        "tsp failed",
        "nearest failed",
        "aisle failed",
        "zone failed",
    ]


def test_compare_routes_reports_strategies_that_miss_the_deadline(monkeypatch):
    original = NearestNeighborRouting.optimize

    def slow(self, locations, start):
        time.sleep(1.0)
        return original(self, locations, start)

    monkeypatch.setattr(NearestNeighborRouting, "optimize", slow)

    result = routing_service.compare_routes(
        CompareRequest(locations=["A-01-02", "B-01-02"], start_point="A-01-01"),
        timeout_seconds=0.25,
    )

    nearest = next(outcome for outcome in result.outcomes if outcome.algorithm == "nearest")
    assert nearest.error is not None and nearest.error.startswith("Timed out")
    assert result.best is not None


def test_compare_routes_validates_before_fan_out():
    with pytest.raises(ValidationError):
        routing_service.compare_routes(CompareRequest(locations=["A-01-02"], start_point="A-01-01"))
    with pytest.raises(ParseError):
        routing_service.compare_routes(CompareRequest(locations=["A-01-02", "nope"], start_point="A-01-01"))


def test_route_distance_keeps_full_precision_for_ranking():
    request = _request(
        ["A-01-02", "A-01-05"],
        layout=WarehouseLayout(shelf_spacing_m=0.0011),
    )
    route = routing_service.optimize_route(request)

    assert route.total_distance_meters == pytest.approx(0.0044)


def test_pick_best_compares_unrounded_distances():
    outcomes = [
        StrategyOutcome("tsp", [], route=_route("tsp", 10.004)),
        StrategyOutcome("nearest", [], route=_route("nearest", 10.001)),
    ]

    assert routing_service._pick_best(outcomes).algorithm == "nearest"
