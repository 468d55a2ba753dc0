"""Error types raised by the pick-route engine."""

from __future__ import annotations


class RouteOptimizationError(Exception):
    """Base class for every error the engine reports to callers."""


class ParseError(RouteOptimizationError, ValueError):
    """A location code did not match ``<zone>-<aisle>-<shelf>``."""

    def __init__(self, code: object, reason: str | None = None) -> None:
        self.code = code
        message = f"Invalid location format: {code!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValidationError(RouteOptimizationError, ValueError):
    """A route request was rejected before any computation started."""


class AlgorithmError(RouteOptimizationError):
    """A strategy could not produce a route for otherwise valid input."""

    def __init__(self, algorithm: str, message: str) -> None:
        self.algorithm = algorithm
        super().__init__(message)
