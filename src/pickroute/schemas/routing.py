"""Route optimization request/response schemas."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class WarehouseLayout(BaseModel):
    """Per-request overrides for the distance model; unset fields keep the defaults."""

    shelf_spacing_m: Optional[float] = Field(None, gt=0)
    aisle_spacing_m: Optional[float] = Field(None, gt=0)
    zone_transition_distance_m: Optional[float] = Field(None, ge=0)
    zone_crossover_aisles: Optional[List[Annotated[int, Field(ge=0)]]] = Field(None, min_length=1)
    walking_speed_m_per_min: Optional[float] = Field(None, gt=0)
    per_stop_handling_minutes: Optional[float] = Field(None, ge=0)


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    locations: List[str] = Field(..., description="Bin location codes to visit, e.g. 'A-12-03'.")
    start_point: Optional[str] = Field(
        default=None,
        alias="startPoint",
        description="Location the picker starts from; excluded from the returned path.",
    )
    return_to_start: bool = Field(
        default=False,
        alias="returnToStart",
        description="Include the walk back to the start point in the distance.",
    )
    layout: Optional[WarehouseLayout] = Field(default=None, description="Warehouse geometry overrides.")


class RouteRequest(CompareRequest):
    algorithm: Optional[str] = Field(
        default=None,
        description="One of 'nearest', 'tsp', 'aisle', 'zone'. Chosen automatically when omitted.",
    )


class OptimizedRouteModel(BaseModel):
    locations: List[str]
    optimized_path: List[str]
    total_distance_meters: float
    estimated_time_minutes: float
    algorithm: str
    exact: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RouteLegModel(BaseModel):
    sequence: int
    from_location: str
    to_location: str
    distance_meters: float
    travel_time_minutes: float


class Coordinates(BaseModel):
    x: float
    y: float
    z: float


class WaypointModel(BaseModel):
    location: str
    type: Literal["start", "pickup", "end"]
    sequence: int
    coordinates: Coordinates


class DetailedRouteModel(OptimizedRouteModel):
    start_point: str
    legs: List[RouteLegModel]
    waypoints: List[WaypointModel]


class ComparisonEntryModel(BaseModel):
    algorithm: str
    locations: List[str]
    optimized_path: Optional[List[str]] = None
    total_distance_meters: Optional[float] = None
    estimated_time_minutes: Optional[float] = None
    exact: Optional[bool] = None
    error: Optional[str] = None


class ComparisonModel(BaseModel):
    comparison: List[ComparisonEntryModel]
    best: Optional[str]
    best_distance: float
    best_time: float


class OptimizeResponse(BaseModel):
    success: Literal[True] = True
    data: OptimizedRouteModel


class DetailedOptimizeResponse(BaseModel):
    success: Literal[True] = True
    data: DetailedRouteModel


class CompareResponse(BaseModel):
    success: Literal[True] = True
    data: ComparisonModel


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[List[Any]] = None


class RoutingConfigModel(BaseModel):
    distance: Dict[str, Any]
    min_locations: int
    max_locations: int
    tsp_exact_max_locations: int
    tsp_max_locations: int
    two_opt_max_iterations: int
    algorithms: List[str]
