"""Traveling-salesman pick routing.

Small inputs are solved exactly with Held-Karp dynamic programming
(O(n^2 * 2^n)). Larger inputs fall back to 2-opt local search seeded from the
nearest-neighbour walk, which is only an approximation. The ``exact`` flag in
the result metadata tells the two tiers apart.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ....config import settings
from ....models.domain import Location
from ..distance import DistanceModel
from ..errors import AlgorithmError
from .base import PathResult, RouteStrategy, expand_duplicates, group_duplicates
from .nearest import NearestNeighborRouting

logger = logging.getLogger(__name__)

# Minimum gain for a 2-opt move to count as an improvement.
IMPROVEMENT_EPSILON = 1e-9


class TravelingSalesmanRouting(RouteStrategy):
    name = "tsp"

    def __init__(
        self,
        distance_model: DistanceModel | None = None,
        *,
        exact_max_locations: int | None = None,
        max_locations: int | None = None,
        max_iterations: int | None = None,
        return_to_start: bool = False,
    ) -> None:
        super().__init__(distance_model)
        self.exact_max_locations = (
            exact_max_locations if exact_max_locations is not None else settings.tsp_exact_max_locations
        )
        self.max_locations = max_locations if max_locations is not None else settings.tsp_max_locations
        self.max_iterations = max_iterations if max_iterations is not None else settings.two_opt_max_iterations
        self.return_to_start = return_to_start

    def optimize(self, locations: Sequence[Location], start: Location) -> PathResult:
        if not locations:
            raise AlgorithmError(self.name, "TSP requires at least one location.")

        unique, copies = group_duplicates(locations)
        if len(unique) > self.max_locations:
            raise AlgorithmError(
                self.name,
                f"TSP supports at most {self.max_locations} distinct locations, got {len(unique)}.",
            )

        if len(unique) <= self.exact_max_locations:
            order = self._held_karp(unique, start)
            metadata = {"exact": True, "method": "held_karp"}
        else:
            order, iterations, converged = self._two_opt(unique, start)
            metadata = {
                "exact": False,
                "method": "two_opt",
                "iterations": iterations,
                "converged": converged,
            }
        metadata["distinct_locations"] = len(unique)
        metadata["closed_tour"] = self.return_to_start
        return PathResult(expand_duplicates(order, copies), metadata=metadata)

    def _held_karp(self, nodes: list[Location], start: Location) -> list[Location]:
        """Exact minimum-distance Hamiltonian path from ``start`` over ``nodes``."""

        count = len(nodes)
        matrix = self.distance_model.matrix(nodes)
        from_start = [self.distance_model.distance(start, node) for node in nodes]
        full = (1 << count) - 1

        cost = [[math.inf] * count for _ in range(full + 1)]
        parent = [[-1] * count for _ in range(full + 1)]
        for node in range(count):
            cost[1 << node][node] = from_start[node]

        # every superset mask is numerically larger, so one ascending pass suffices
        for mask in range(1, full + 1):
            row = cost[mask]
            for last in range(count):
                base = row[last]
                if base == math.inf:
                    continue
                for nxt in range(count):
                    bit = 1 << nxt
                    if mask & bit:
                        continue
                    candidate = base + matrix[last][nxt]
                    if candidate < cost[mask | bit][nxt]:
                        cost[mask | bit][nxt] = candidate
                        parent[mask | bit][nxt] = last

        closing = from_start if self.return_to_start else [0.0] * count
        last = min(range(count), key=lambda node: (cost[full][node] + closing[node], node))

        order: list[int] = []
        mask = full
        while last != -1:
            order.append(last)
            previous = parent[mask][last]
            mask ^= 1 << last
            last = previous
        order.reverse()
        return [nodes[index] for index in order]

    def _two_opt(self, nodes: list[Location], start: Location) -> tuple[list[Location], int, bool]:
        """Improve the nearest-neighbour walk by reversing segments."""

        seed = NearestNeighborRouting(self.distance_model).order(nodes, start)
        points = [start, *seed]
        matrix = self.distance_model.matrix(points)
        route = list(range(1, len(points)))
        tail = 0 if self.return_to_start else None

        iterations = 0
        improved = True
        while improved and iterations < self.max_iterations:
            improved = False
            iterations += 1
            for i in range(len(route) - 1):
                for j in range(i + 1, len(route)):
                    before_i = route[i - 1] if i > 0 else 0
                    after_j = route[j + 1] if j + 1 < len(route) else tail
                    current = matrix[before_i][route[i]]
                    proposed = matrix[before_i][route[j]]
                    if after_j is not None:
                        current += matrix[route[j]][after_j]
                        proposed += matrix[route[i]][after_j]
                    if proposed < current - IMPROVEMENT_EPSILON:
                        route[i : j + 1] = route[i : j + 1][::-1]
                        improved = True

        converged = not improved
        if not converged:
            logger.warning(
                f"2-opt stopped after {iterations} iterations without converging "
                f"({len(nodes)} locations)"
            )
        return [points[index] for index in route], iterations, converged
