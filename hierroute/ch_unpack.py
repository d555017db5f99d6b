"""Turning a path in a contraction hierarchy back into original edges."""

from __future__ import annotations

from collections.abc import Mapping

from hierroute.ch_distance import CHGraph, Direction
from hierroute.dijkstra import PathEdge


def forward_chain(prev: Mapping[int, int], meeting_node: int | None) -> list[tuple[int, int]]:
    """Return the forward search edges leading to ``meeting_node``, in path order."""
    chain: list[tuple[int, int]] = []
    if meeting_node is None:
        return chain
    current = meeting_node
    while current in prev:
        chain.append((prev[current], current))
        current = prev[current]
    chain.reverse()
    return chain


def backward_chain(prev: Mapping[int, int], meeting_node: int | None) -> list[tuple[int, int]]:
    """Return the backward search edges leaving ``meeting_node``, in path order."""
    chain: list[tuple[int, int]] = []
    if meeting_node is None:
        return chain
    current = meeting_node
    while current in prev:
        chain.append((current, prev[current]))
        current = prev[current]
    return chain


def _unpack(graph: CHGraph, source: int, target: int, direction: Direction) -> list[PathEdge]:
    edges: list[PathEdge] = []
    pending = [(source, target, direction)]
    while pending:
        s, t, d = pending.pop()
        middle = graph.middle_node(s, t, d)
        if middle is None:
            edges.append(PathEdge(s, t, graph.distance(s, t, d)))
            continue
        # The first half is pushed last so that it is expanded first.
        pending.append((middle, t, Direction.FORWARD))
        pending.append((s, middle, Direction.BACKWARD))
    return edges


def unpack_forward(graph: CHGraph, source: int, target: int) -> list[PathEdge]:
    """Expand the forward edge between the two nodes into original edges."""
    return _unpack(graph, source, target, Direction.FORWARD)


def unpack_backward(graph: CHGraph, source: int, target: int) -> list[PathEdge]:
    """Expand the backward edge between the two nodes into original edges."""
    return _unpack(graph, source, target, Direction.BACKWARD)