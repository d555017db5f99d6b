"""A mutable directed graph used while building a contraction hierarchy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShortcutEdge:
    """A directed edge; ``middle_node`` is the node a shortcut bypasses, None for an original edge."""

    source_node: int
    target_node: int
    weight: int
    middle_node: int | None = None


class ContractionGraph:
    """A directed graph with at most one edge per ordered pair of nodes.

    Edges can be added, improved and removed while nodes are contracted. Each
    node also carries the rank it received in the contraction order. Self
    loops never lie on a shortest path and are not stored.
    """

    def __init__(self, nodes: int) -> None:
        if nodes < 0:
            raise ValueError("the number of nodes cannot be negative")
        self._outgoing: list[dict[int, ShortcutEdge]] = [{} for _ in range(nodes)]
        self._incoming: list[dict[int, int]] = [{} for _ in range(nodes)]
        self.ranks: list[int] = [0] * nodes

    def __len__(self) -> int:
        return len(self._outgoing)

    def _check(self, node: int) -> None:
        if not 0 <= node < len(self._outgoing):
            raise IndexError(f"node {node} is not in the graph")

    def _store(self, edge: ShortcutEdge) -> None:
        self._outgoing[edge.source_node][edge.target_node] = edge
        self._incoming[edge.target_node][edge.source_node] = edge.weight

    def add_edge(self, source: int, target: int, weight: int) -> None:
        """Add an original edge, keeping the lighter one if the pair is already connected."""
        self._check(source)
        self._check(target)
        if weight < 0:
            raise ValueError("edge weights cannot be negative")
        if source == target:
            return
        existing = self._outgoing[source].get(target)
        if existing is None or weight < existing.weight:
            self._store(ShortcutEdge(source, target, weight))

    def add_shortcut_edge(self, source: int, target: int, weight: int, middle_node: int) -> bool:
        """Add a shortcut bypassing ``middle_node``.

        Returns True when the shortcut was stored, False when an edge at least
        as short already connects the two nodes.
        """
        self._check(source)
        self._check(target)
        self._check(middle_node)
        if source == target:
            return False
        existing = self._outgoing[source].get(target)
        if existing is not None and existing.weight <= weight:
            return False
        self._store(ShortcutEdge(source, target, weight, middle_node))
        return True

    def remove_edge(self, source: int, target: int) -> None:
        """Remove the edge from ``source`` to ``target``; KeyError if there is none."""
        self._check(source)
        self._check(target)
        if target not in self._outgoing[source]:
            raise KeyError(f"no edge from {source} to {target}")
        del self._outgoing[source][target]
        del self._incoming[target][source]

    def incoming_edges(self, node: int) -> dict[int, int]:
        """Return a copy of the ``{source: weight}`` map of edges ending in ``node``."""
        self._check(node)
        return dict(self._incoming[node])

    def outgoing_edges(self, node: int) -> dict[int, ShortcutEdge]:
        """Return a copy of the ``{target: edge}`` map of edges leaving ``node``."""
        self._check(node)
        return dict(self._outgoing[node])

    def degree(self, node: int) -> int:
        """Return the number of incoming plus outgoing edges of ``node``."""
        self._check(node)
        return len(self._incoming[node]) + len(self._outgoing[node])

    def set_rank(self, node: int, rank: int) -> None:
        """Record the contraction rank of ``node``."""
        self._check(node)
        self.ranks[node] = rank