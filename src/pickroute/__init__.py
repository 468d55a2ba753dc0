"""Warehouse pick-route optimization service."""

__version__ = "0.1.0"
