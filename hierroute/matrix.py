"""A full distance matrix answering queries with a single table lookup."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from hierroute.computors import SlowComputor, adjacency_lists
from hierroute.structures import INFINITY

_log = logging.getLogger(__name__)


class DistanceMatrix:
    """An n*n table of precomputed shortest distances, stored row by row.

    Unreachable pairs hold ``INFINITY``. Memory grows with the square of the
    number of nodes, so this suits small graphs only.
    """

    def __init__(self, nodes: int, distances: Sequence[int] | None = None) -> None:
        if nodes < 0:
            raise ValueError("the number of nodes cannot be negative")
        size = nodes * nodes
        if distances is None:
            table = [0] * size
        else:
            table = list(distances)
            if len(table) != size:
                raise ValueError(
                    f"a matrix of {nodes} nodes needs {size} values, got {len(table)}"
                )
        self.nodes = nodes
        self.distances = table

    def _index(self, source: int, target: int) -> int:
        if not (0 <= source < self.nodes and 0 <= target < self.nodes):
            raise IndexError(f"({source}, {target}) is outside a {self.nodes}x{self.nodes} matrix")
        return source * self.nodes + target

    def find_distance(self, start: int, goal: int) -> int:
        """Return the distance from ``start`` to ``goal``, or INFINITY if unreachable."""
        return self.distances[self._index(start, goal)]

    def set_distance(self, source: int, target: int, distance: int) -> None:
        """Store the distance from ``source`` to ``target``."""
        if not 0 <= distance <= INFINITY:
            raise OverflowError(f"distance {distance} does not fit into the matrix")
        self.distances[self._index(source, target)] = distance

    def info(self) -> str:
        """Describe how many entries are infinite or suspiciously large."""
        half = INFINITY // 2
        max_count = sum(1 for value in self.distances if value == INFINITY)
        half_count = sum(1 for value in self.distances if value >= half)
        total = self.nodes * self.nodes

        def ratio(count: int) -> float:
            return count / total if total else float("nan")

        return (
            "Computed distance matrix info.\n"
            f"Distance matrix contains {max_count} UINF values. "
            f"That is {ratio(max_count):g} %.\n"
            f"Distance matrix contains {half_count} values that are at least half "
            f"of the maximum value. That is {ratio(half_count):g} %.\n"
        )


def compute_distance_matrix(nodes: int, edges: Iterable[tuple[int, int, int]]) -> DistanceMatrix:
    """Compute the full distance matrix of a graph given as ``(source, target, weight)`` edges."""
    outgoing, _incoming = adjacency_lists(nodes, edges)
    started = time.perf_counter()
    table = SlowComputor().compute(outgoing)
    _log.info("Distance Matrix preprocessing took %.3f s", time.perf_counter() - started)
    return DistanceMatrix(nodes, table)