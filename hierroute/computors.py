"""Computation of full all-pairs distance matrices."""

from __future__ import annotations

import heapq
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field

from hierroute.dijkstra import Adjacency
from hierroute.structures import INFINITY

_log = logging.getLogger(__name__)


def adjacency_lists(
    nodes: int, edges: Iterable[tuple[int, int, int]]
) -> tuple[list[list[tuple[int, int]]], list[list[tuple[int, int]]]]:
    """Build outgoing and incoming adjacency lists from ``(source, target, weight)`` triples."""
    outgoing: list[list[tuple[int, int]]] = [[] for _ in range(nodes)]
    incoming: list[list[tuple[int, int]]] = [[] for _ in range(nodes)]
    for source, target, weight in edges:
        if not (0 <= source < nodes and 0 <= target < nodes):
            raise ValueError(f"edge {source} -> {target} refers to a node outside 0..{nodes - 1}")
        outgoing[source].append((target, weight))
        incoming[target].append((source, weight))
    return outgoing, incoming


@dataclass
class DistanceMatrixComputor(ABC):
    """Computes an n*n distance matrix stored row by row in a flat list.

    ``max_value`` is the largest distance the matrix can hold; it also marks
    pairs with no path between them.
    """

    max_value: int = INFINITY
    size: int = field(default=0, init=False)

    @abstractmethod
    def compute(self, outgoing: Adjacency) -> list[int]:
        """Return the flat distance matrix for the graph."""


@dataclass
class SlowComputor(DistanceMatrixComputor):
    """Fills the matrix with one full Dijkstra run per row."""

    def compute(self, outgoing: Adjacency) -> list[int]:
        """Return distances from every node to every node."""
        return self._fill(outgoing)

    def compute_reversed(self, incoming: Adjacency) -> list[int]:
        """Return the matrix of the graph with all edges turned around.

        ``incoming`` holds, for each node, the ``(source, weight)`` pairs of
        edges ending in it.
        """
        return self._fill(incoming)

    def _fill(self, adjacency: Adjacency) -> list[int]:
        self.size = len(adjacency)
        matrix: list[int] = []
        for row in range(self.size):
            if row % 100 == 0:
                _log.debug("Computed %d/%d rows of the distance matrix.", row, self.size)
            matrix.extend(self._row(row, adjacency))
        _log.debug("Computed %d/%d rows of the distance matrix.", self.size, self.size)
        return matrix

    def _row(self, source: int, adjacency: Adjacency) -> list[int]:
        limit = self.max_value
        distance = [limit] * len(adjacency)
        distance[source] = 0
        heap = [(0, source)]
        while heap:
            weight, node = heapq.heappop(heap)
            if weight > distance[node]:
                continue
            for target, edge_weight in adjacency[node]:
                new_distance = weight + edge_weight
                if new_distance > limit:
                    raise OverflowError(
                        f"distance {new_distance} does not fit under the limit {limit}"
                    )
                if new_distance < distance[target]:
                    distance[target] = new_distance
                    heapq.heappush(heap, (new_distance, target))
        return distance