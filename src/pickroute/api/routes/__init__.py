"""Route group exports."""

from . import health, route_optimization

__all__ = ["health", "route_optimization"]
