"""Small records shared by the shortest-path and contraction code."""

from __future__ import annotations

from dataclasses import dataclass

#: Distance value meaning "not reached" / "no path".
INFINITY = 2**32 - 1


@dataclass
class NodeData:
    """Per-node state used by the contraction hierarchies query."""

    forward_dist: int = INFINITY
    backward_dist: int = INFINITY
    rank: int = 0
    forward_reached: bool = False
    backward_reached: bool = False
    forward_settled: bool = False
    backward_settled: bool = False
    forward_stalled: bool = False
    backward_stalled: bool = False

    def reset_forward(self) -> None:
        """Forget everything the forward search learned about this node."""
        self.forward_dist = INFINITY
        self.forward_reached = False
        self.forward_settled = False

    def reset_backward(self) -> None:
        """Forget everything the backward search learned about this node."""
        self.backward_dist = INFINITY
        self.backward_reached = False
        self.backward_settled = False

    def reset_forward_stall(self) -> None:
        """Clear the forward stall flag."""
        self.forward_stalled = False

    def reset_backward_stall(self) -> None:
        """Clear the backward stall flag."""
        self.backward_stalled = False


@dataclass
class CHNode:
    """An entry of the contraction priority queue; the weight may be negative."""

    id: int
    weight: int


@dataclass(frozen=True)
class DijkstraNode:
    """A node together with its tentative distance, ordered by that distance."""

    id: int
    weight: int

    def __lt__(self, other: DijkstraNode) -> bool:
        return self.weight < other.weight


@dataclass(frozen=True)
class HopsDijkstraNode(DijkstraNode):
    """A Dijkstra node that also counts the edges on the path leading to it."""

    hops: int = 0