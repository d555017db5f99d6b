"""The bidirectional upward search on a contraction hierarchy, with path bookkeeping."""

from __future__ import annotations

import heapq
from collections import deque

from hierroute.ch_distance import CHGraph, Direction
from hierroute.structures import INFINITY


class BidirectionalSearch:
    """Runs the hierarchy query and keeps what is needed to rebuild the path.

    After :meth:`run`, ``meeting_node`` is the node where the two searches met
    on the best path (None if no path exists), and ``forward_prev`` /
    ``backward_prev`` map each reached node to the node it was reached from.
    The node states in the graph stay changed until :meth:`reset` is called.
    """

    def __init__(self, graph: CHGraph) -> None:
        self.graph = graph
        self.upperbound = INFINITY
        self.meeting_node: int | None = None
        self.forward_prev: dict[int, int] = {}
        self.backward_prev: dict[int, int] = {}
        self._changed: dict[Direction, list[int]] = {d: [] for d in Direction}
        self._stall_changed: dict[Direction, list[int]] = {d: [] for d in Direction}

    def _prev(self, direction: Direction) -> dict[int, int]:
        return self.forward_prev if direction is Direction.FORWARD else self.backward_prev

    def run(self, source: int, target: int) -> int:
        """Search from ``source`` to ``target`` and return the distance, or INFINITY."""
        self.reset()
        graph = self.graph
        queues: dict[Direction, list[tuple[int, int]]] = {
            Direction.FORWARD: [(0, source)],
            Direction.BACKWARD: [(0, target)],
        }
        finished = {Direction.FORWARD: False, Direction.BACKWARD: False}

        for direction, node in ((Direction.FORWARD, source), (Direction.BACKWARD, target)):
            data = graph.data(node)
            setattr(data, f"{direction.value}_dist", 0)
            setattr(data, f"{direction.value}_reached", True)
            self._changed[direction].append(node)

        self.upperbound = INFINITY
        self.meeting_node = None
        forward = False
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
            if self._step(queue, direction):
                finished[direction] = True
            if all(finished.values()):
                break

        return self.upperbound

    def _step(self, queue: list[tuple[int, int]], direction: Direction) -> bool:
        graph = self.graph
        own = direction.value
        other = direction.opposite.value
        prev = self._prev(direction)

        cur_len, cur = heapq.heappop(queue)
        data = graph.data(cur)
        if getattr(data, f"{own}_settled") or getattr(data, f"{own}_stalled"):
            return False

        setattr(data, f"{own}_settled", True)
        if getattr(data, f"{other}_settled"):
            candidate = cur_len + getattr(data, f"{other}_dist")
            if candidate < self.upperbound:
                self.upperbound = candidate
                self.meeting_node = cur

        for edge in graph.next_nodes(cur):
            if not getattr(edge, own):
                continue
            target = graph.data(edge.target_node)
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
                    prev[edge.target_node] = cur

        return bool(queue) and queue[0][0] > self.upperbound

    def forward_stall(self, node: int, distance: int) -> None:
        """Stall ``node`` in the forward search and spread the stall breadth-first."""
        self._stall(Direction.FORWARD, node, distance)

    def backward_stall(self, node: int, distance: int) -> None:
        """Stall ``node`` in the backward search and spread the stall breadth-first."""
        self._stall(Direction.BACKWARD, node, distance)

    def _stall(self, direction: Direction, node: int, distance: int) -> None:
        graph = self.graph
        own = direction.value
        pending = deque([(node, distance)])
        while pending:
            cur, cur_dist = pending.popleft()
            setattr(graph.data(cur), f"{own}_stalled", True)
            self._stall_changed[direction].append(cur)

            for edge in graph.next_nodes(cur):
                if not getattr(edge, own):
                    continue
                target = graph.data(edge.target_node)
                if not getattr(target, f"{own}_reached"):
                    continue
                new_dist = cur_dist + edge.weight
                old = getattr(target, f"{own}_dist")
                if new_dist < old and not getattr(target, f"{own}_stalled"):
                    pending.append((edge.target_node, new_dist))
                    if old == INFINITY:
                        self._changed[direction].append(edge.target_node)
                    setattr(target, f"{own}_dist", new_dist)

    def reset(self) -> None:
        """Restore the node states touched by the last search and forget its predecessors."""
        graph = self.graph
        for node in self._changed[Direction.FORWARD]:
            graph.data(node).reset_forward()
        for node in self._changed[Direction.BACKWARD]:
            graph.data(node).reset_backward()
        for node in self._stall_changed[Direction.FORWARD]:
            graph.data(node).reset_forward_stall()
        for node in self._stall_changed[Direction.BACKWARD]:
            graph.data(node).reset_backward_stall()
        for changed in (*self._changed.values(), *self._stall_changed.values()):
            changed.clear()
        self.forward_prev.clear()
        self.backward_prev.clear()