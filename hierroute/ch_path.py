"""Shortest path queries on a contraction hierarchy, with the path unpacked."""

from __future__ import annotations

import sys
from typing import TextIO

from hierroute.ch_distance import CHGraph
from hierroute.ch_query import BidirectionalSearch
from hierroute.ch_unpack import backward_chain, forward_chain, unpack_backward, unpack_forward
from hierroute.dijkstra import PathEdge


class CHPathQueryManager:
    """Answers queries that need the actual path and not only its length.

    Paths are given as edges of the original graph: every shortcut met on the
    way is expanded recursively.
    """

    def __init__(self, graph: CHGraph) -> None:
        self.graph = graph
        self._search = BidirectionalSearch(graph)

    def _resolve(self, source: int, target: int) -> tuple[int, int | None, list[PathEdge]]:
        search = self._search
        try:
            distance = search.run(source, target)
            meeting = search.meeting_node
            edges: list[PathEdge] = []
            for s, t in forward_chain(search.forward_prev, meeting):
                edges.extend(unpack_forward(self.graph, s, t))
            for s, t in backward_chain(search.backward_prev, meeting):
                edges.extend(unpack_backward(self.graph, s, t))
        finally:
            search.reset()
        return distance, meeting, edges

    def find_distance(self, source: int, target: int) -> int:
        """Return the shortest distance from ``source`` to ``target``, or INFINITY."""
        try:
            return self._search.run(source, target)
        finally:
            self._search.reset()

    def find_path(self, source: int, target: int) -> tuple[int, list[tuple[int, int]]]:
        """Return the distance and the ``(source, target)`` pairs of the path's original edges."""
        distance, _meeting, edges = self._resolve(source, target)
        return distance, [(edge.source, edge.target) for edge in edges]

    def find_path_with_lengths(self, source: int, target: int) -> tuple[int, list[PathEdge]]:
        """Return the distance and the original edges of the path with their lengths."""
        distance, _meeting, edges = self._resolve(source, target)
        return distance, edges

    def find_distance_output_path(
        self, source: int, target: int, stream: TextIO | None = None
    ) -> int:
        """Write the unpacked path in readable form to ``stream`` and return the distance."""
        out = sys.stdout if stream is None else stream
        distance, meeting, edges = self._resolve(source, target)
        if meeting is None:
            out.write("No path was found! Nothing to unpack!\n")
            return distance
        out.write("~~~ Outputting shortest path (unpacked from CH) ~~~\n")
        for edge in edges:
            out.write(f"{edge.source} -> {edge.target} ({edge.length})\n")
        out.write("~~~ End of path output ~~~\n")
        return distance

    def unpack_forward_shortcut(self, source: int, target: int) -> list[PathEdge]:
        """Expand the forward edge between the two nodes into original edges."""
        return unpack_forward(self.graph, source, target)

    def unpack_backward_shortcut(self, source: int, target: int) -> list[PathEdge]:
        """Expand the backward edge between the two nodes into original edges."""
        return unpack_backward(self.graph, source, target)