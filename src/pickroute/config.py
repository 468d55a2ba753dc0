"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PICKROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Pick Route Optimization API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Log level for the pickroute logger.")

    # Warehouse geometry used by the distance model
    shelf_spacing_m: float = Field(default=1.5, gt=0.0, description="Walking distance between adjacent shelves.")
    aisle_spacing_m: float = Field(default=3.0, gt=0.0, description="Walking distance between adjacent aisles.")
    zone_transition_distance_m: float = Field(
        default=10.0,
        ge=0.0,
        description="Fixed distance between the crossover points of two zones.",
    )
    zone_crossover_aisles: tuple[int, ...] = Field(
        default=(0,),
        description="Aisle positions at which pickers can leave a zone (0 = zone front).",
    )
    walking_speed_m_per_min: float = Field(default=60.0, gt=0.0)
    per_stop_handling_minutes: float = Field(default=0.25, ge=0.0, description="Average pick time per stop.")

    # Request limits
    min_locations: int = Field(default=2, ge=2)
    max_locations: int = Field(default=50, ge=2)

    # Solver limits
    tsp_exact_max_locations: int = Field(
        default=10,
        ge=1,
        le=16,
        description="Largest distinct location count solved exactly with Held-Karp.",
    )
    tsp_max_locations: int = Field(
        default=200,
        ge=1,
        description="Hard ceiling for the TSP strategy; larger inputs are rejected.",
    )
    two_opt_max_iterations: int = Field(default=1000, ge=1)
    compare_max_workers: int = Field(default=4, ge=1)
    request_timeout_seconds: float = Field(default=10.0, gt=0.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("zone_crossover_aisles", mode="before")
    @classmethod
    def _parse_int_tuple_from_env(cls, value: Any) -> tuple[int, ...]:
        """Parse integer tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(int(item) for item in value)
        if isinstance(value, int):
            return (value,)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(int(item) for item in parsed)
                if isinstance(parsed, int):
                    return (parsed,)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            if "," in value:
                return tuple(int(item.strip()) for item in value.split(",") if item.strip())
            if value.strip():
                return (int(value.strip()),)
        return tuple()

    @field_validator("zone_crossover_aisles")
    @classmethod
    def _require_crossover(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("zone_crossover_aisles must contain at least one aisle position")
        if any(aisle < 0 for aisle in value):
            raise ValueError("zone_crossover_aisles must not contain negative positions")
        return value


settings = Settings()
