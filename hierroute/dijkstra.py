"""Plain Dijkstra searches over adjacency lists.

A graph is given as a sequence indexed by node id whose items are sequences of
``(neighbour, weight)`` pairs. Unreachable nodes get the distance ``INFINITY``.
"""

from __future__ import annotations

import heapq
from collections.abc import Sequence
from dataclasses import dataclass

from hierroute.structures import INFINITY

Adjacency = Sequence[Sequence[tuple[int, int]]]


@dataclass(frozen=True)
class PathEdge:
    """One edge of a reconstructed path together with its length."""

    source: int
    target: int
    length: int


def _search(
    start: int, goal: int, outgoing: Adjacency, track: bool
) -> tuple[int, list[int], list[list[int]]]:
    distance = [INFINITY] * len(outgoing)
    distance[start] = 0
    previous: list[list[int]] = [[] for _ in outgoing] if track else []
    heap = [(0, start)]
    while heap:
        weight, node = heapq.heappop(heap)
        if node == goal:
            return weight, distance, previous
        if weight > distance[node]:
            continue
        for target, edge_weight in outgoing[node]:
            new_distance = weight + edge_weight
            if new_distance < distance[target]:
                distance[target] = new_distance
                heapq.heappush(heap, (new_distance, target))
                if track:
                    previous[target].append(node)
    return INFINITY, distance, previous


def shortest_distance(start: int, goal: int, outgoing: Adjacency) -> int:
    """Return the shortest distance from ``start`` to ``goal``, or INFINITY."""
    return _search(start, goal, outgoing, track=False)[0]


def shortest_path(start: int, goal: int, outgoing: Adjacency) -> tuple[int, list[PathEdge]]:
    """Return the shortest distance and the edges of a path from start to goal.

    When the goal cannot be reached the result is ``(INFINITY, [])``.
    Among the recorded predecessors of a node, the one with the lowest final
    distance is followed.
    """
    found, distance, previous = _search(start, goal, outgoing, track=True)
    if found == INFINITY:
        return INFINITY, []

    path: list[PathEdge] = []
    current = goal
    while previous[current]:
        best = min(previous[current], key=lambda node: distance[node])
        path.append(PathEdge(best, current, distance[current] - distance[best]))
        current = best
    path.reverse()
    return found, path


def format_path(start: int, goal: int, distance: int, path: Sequence[PathEdge]) -> str:
    """Render a path found by :func:`shortest_path` as human readable text."""
    if distance == INFINITY:
        return f"Did not find path from {start} to {goal}.\n"
    origin = path[0].source if path else start
    lines = [f"~~~ Outputting path from {origin} to {goal} (distance {distance}) ~~~"]
    lines.extend(f"{edge.source} -> {edge.target} ({edge.length})" for edge in path)
    lines.append("~~~ End of path ~~~")
    return "\n".join(lines) + "\n"


def one_to_all(source: int, adjacency: Adjacency) -> list[int]:
    """Return the distances from ``source`` to every node.

    Passing incoming adjacency lists gives distances in the reversed graph.
    """
    distances = [INFINITY] * len(adjacency)
    distances[source] = 0
    heap = [(0, source)]
    while heap:
        weight, node = heapq.heappop(heap)
        if weight > distances[node]:
            continue
        for target, edge_weight in adjacency[node]:
            new_distance = weight + edge_weight
            if new_distance < distances[target]:
                distances[target] = new_distance
                heapq.heappush(heap, (new_distance, target))
    return distances