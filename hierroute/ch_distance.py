"""Distance queries on a contraction hierarchy."""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from enum import Enum

from hierroute.structures import INFINITY, NodeData


class Direction(Enum):
    """Search direction; the value names the matching edge flag and node fields."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def opposite(self) -> Direction:
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


@dataclass(frozen=True)
class QueryEdge:
    """An edge stored at one node of the hierarchy.

    ``forward`` means the owning node can go to ``target_node``; ``backward``
    means ``target_node`` can go to the owning node. ``middle_node`` is the
    node a shortcut bypasses, or None for an original edge.
    """

    target_node: int
    weight: int
    forward: bool
    backward: bool
    middle_node: int | None = None


class CHGraph:
    """A contracted graph whose edges carry direction flags.

    Edges are normally stored at their lower-ranked endpoint, pointing to the
    higher-ranked one.
    """

    def __init__(self, ranks) -> None:
        self._data = [NodeData(rank=rank) for rank in ranks]
        self._edges: list[list[QueryEdge]] = [[] for _ in self._data]

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, node: int) -> None:
        if not 0 <= node < len(self._data):
            raise IndexError(f"node {node} is not in the graph")

    def add_edge(
        self,
        source: int,
        target: int,
        weight: int,
        forward: bool,
        backward: bool,
        middle_node: int | None = None,
    ) -> None:
        """Store an edge in the list of ``source``."""
        self._check(source)
        self._check(target)
        self._edges[source].append(QueryEdge(target, weight, forward, backward, middle_node))

    def next_nodes(self, node: int) -> list[QueryEdge]:
        """Return the edges stored at ``node``."""
        return self._edges[node]

    def data(self, node: int) -> NodeData:
        """Return the mutable query state of ``node``."""
        return self._data[node]

    def _find_edge(self, source: int, target: int, direction: Direction) -> QueryEdge:
        self._check(source)
        self._check(target)
        if self._data[source].rank < self._data[target].rank:
            owner, other = source, target
        else:
            owner, other = target, source
        for edge in self._edges[owner]:
            if edge.target_node == other and getattr(edge, direction.value):
                return edge
        raise KeyError(f"no {direction.value} edge between {source} and {target}")

    def middle_node(self, source: int, target: int, direction: Direction) -> int | None:
        """Return the node bypassed by the edge between the two nodes, or None.

        The edge is looked up at the lower-ranked endpoint and must carry the
        flag of ``direction``.
        """
        return self._find_edge(source, target, direction).middle_node

    def distance(self, source: int, target: int, direction: Direction) -> int:
        """Return the weight of the edge between the two nodes, found as in middle_node."""
        return self._find_edge(source, target, direction).weight


class CHDistanceQueryManager:
    """Answers shortest-distance queries with the bidirectional upward search."""

    def __init__(self, graph: CHGraph) -> None:
        self.graph = graph
        self._changed: dict[Direction, list[int]] = {d: [] for d in Direction}

    def find_distance(self, start: int, goal: int) -> int:
        """Return the shortest distance from ``start`` to ``goal``, or INFINITY."""
        try:
            return self._search(start, goal)
        finally:
            self._reset()

    def _search(self, start: int, goal: int) -> int:
        graph = self.graph
        queues: dict[Direction, list[tuple[int, int]]] = {
            Direction.FORWARD: [(0, start)],
            Direction.BACKWARD: [(0, goal)],
        }
        finished = {Direction.FORWARD: False, Direction.BACKWARD: False}

        for direction, node in ((Direction.FORWARD, start), (Direction.BACKWARD, goal)):
            data = graph.data(node)
            setattr(data, f"{direction.value}_dist", 0)
            setattr(data, f"{direction.value}_reached", True)
            self._changed[direction].append(node)

        forward = False
        upperbound = INFINITY
        fq, bq = queues[Direction.FORWARD], queues[Direction.BACKWARD]

        while fq or bq:
            if finished[Direction.FORWARD] or not fq:
                forward = False
            elif finished[Direction.BACKWARD] or not bq:
                forward = True
            else:
                forward = not forward

            direction = Direction.FORWARD if forward else Direction.BACKWARD
            queue = queues[direction]
            if not queue:
                break
            upperbound, done = self._step(queue, direction, upperbound)
            if done:
                finished[direction] = True
            if all(finished.values()):
                break

        return upperbound

    def _step(
        self, queue: list[tuple[int, int]], direction: Direction, upperbound: int
    ) -> tuple[int, bool]:
        graph = self.graph
        own = direction.value
        other = direction.opposite.value

        cur_len, cur = heapq.heappop(queue)
        data = graph.data(cur)
        if getattr(data, f"{own}_settled") or getattr(data, f"{own}_stalled"):
            return upperbound, False

        setattr(data, f"{own}_settled", True)
        if getattr(data, f"{other}_settled"):
            candidate = cur_len + getattr(data, f"{other}_dist")
            if candidate < upperbound:
                upperbound = candidate

        for edge in graph.next_nodes(cur):
            target = graph.data(edge.target_node)
            # A neighbour that reaches this node more cheaply lowers its label.
            if getattr(edge, other) and getattr(target, f"{own}_reached"):
                shorter = getattr(target, f"{own}_dist") + edge.weight
                if shorter < cur_len:
                    setattr(data, f"{own}_dist", shorter)

            if not getattr(edge, own):
                continue

            if target.rank > data.rank:
                new_len = cur_len + edge.weight
                old = getattr(target, f"{own}_dist")
                if new_len < old:
                    heapq.heappush(queue, (new_len, edge.target_node))
                    if old == INFINITY:
                        self._changed[direction].append(edge.target_node)
                    setattr(target, f"{own}_dist", new_len)
                    setattr(target, f"{own}_reached", True)
                    setattr(target, f"{own}_stalled", False)

        done = bool(queue) and queue[0][0] > upperbound
        return upperbound, done

    def _reset(self) -> None:
        for node in self._changed[Direction.FORWARD]:
            self.graph.data(node).reset_forward()
        for node in self._changed[Direction.BACKWARD]:
            self.graph.data(node).reset_backward()
        for changed in self._changed.values():
            changed.clear()