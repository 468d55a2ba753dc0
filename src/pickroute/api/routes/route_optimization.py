"""Route optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...config import settings
from ...schemas.routing import (
    CompareRequest,
    CompareResponse,
    DetailedOptimizeResponse,
    ErrorResponse,
    OptimizeResponse,
    RouteRequest,
    RoutingConfigModel,
)
from ...services.outputs.route_formatter import comparison_to_model, route_to_detailed_model, route_to_model
from ...services.routing.distance import DistanceModel, DistanceParameters
from ...services.routing.errors import AlgorithmError
from ...services.routing.service import build_parameters, compare_routes, optimize_route
from ...services.routing.strategies import Algorithm

router = APIRouter(prefix="/route-optimization", tags=["route-optimization"])

# status.HTTP_422_UNPROCESSABLE_ENTITY is deprecated in current Starlette
HTTP_422_UNPROCESSABLE = 422

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    HTTP_422_UNPROCESSABLE: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump(exclude_none=True))


@router.post("/optimize", response_model=OptimizeResponse, responses=ERROR_RESPONSES, status_code=status.HTTP_200_OK)
def optimize(payload: RouteRequest):
    logging.info(
        f"Route optimization request: {len(payload.locations)} locations, "
        f"start={payload.start_point}, algorithm={payload.algorithm}"
    )
    try:
        route = optimize_route(payload)
    except ValueError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except AlgorithmError as exc:
        return _error(HTTP_422_UNPROCESSABLE, str(exc))
    except Exception as exc:
        logging.exception(f"Route optimization error: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to optimize route")
    return OptimizeResponse(data=route_to_model(route))


@router.post(
    "/optimize-detailed",
    response_model=DetailedOptimizeResponse,
    responses=ERROR_RESPONSES,
    status_code=status.HTTP_200_OK,
)
def optimize_detailed(payload: RouteRequest):
    """Optimize a route and include per-leg distances and display waypoints."""
    try:
        parameters = build_parameters(payload)
        route = optimize_route(payload, parameters)
        detailed = route_to_detailed_model(route, DistanceModel(parameters))
    except ValueError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except AlgorithmError as exc:
        return _error(HTTP_422_UNPROCESSABLE, str(exc))
    except Exception as exc:
        logging.exception(f"Detailed route optimization error: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to optimize route")
    return DetailedOptimizeResponse(data=detailed)


@router.post("/compare", response_model=CompareResponse, responses=ERROR_RESPONSES, status_code=status.HTTP_200_OK)
def compare(payload: CompareRequest):
    """Run all strategies on the same pick list and report the shortest."""
    logging.info(
        f"Route optimization comparison request: {len(payload.locations)} locations, start={payload.start_point}"
    )
    try:
        result = compare_routes(payload)
    except ValueError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception as exc:
        logging.exception(f"Route comparison error: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to compare routes")
    return CompareResponse(data=comparison_to_model(result))


@router.get("/config", response_model=RoutingConfigModel, status_code=status.HTTP_200_OK)
def get_config() -> RoutingConfigModel:
    return RoutingConfigModel(
        distance=DistanceParameters().as_dict(),
        min_locations=settings.min_locations,
        max_locations=settings.max_locations,
        tsp_exact_max_locations=settings.tsp_exact_max_locations,
        tsp_max_locations=settings.tsp_max_locations,
        two_opt_max_iterations=settings.two_opt_max_iterations,
        algorithms=[algorithm.value for algorithm in Algorithm],
    )
