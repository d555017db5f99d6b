"""Witness searches that decide which shortcuts a node contraction needs."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass

from hierroute.contraction_graph import ContractionGraph, ShortcutEdge
from hierroute.structures import INFINITY

# (hop limit, maximum number of expanded nodes) of the witness searches.
_DEEP_LIMITS = (4, 1000)
_SHALLOW_LIMITS = (2, 100)

Pair = tuple[int, int]


@dataclass
class ShortcutCandidates:
    """The shortcuts that contracting ``node`` could require.

    ``via_node`` maps each ``(source, target)`` pair of uncontracted neighbours
    to the length of the path through ``node``; ``witness`` maps the same pairs
    to the shortest length found without ``node`` (INFINITY if none was found).
    """

    node: int
    sources: list[int]
    targets: list[int]
    via_node: dict[Pair, int]
    witness: dict[Pair, int]

    def needed(self) -> list[ShortcutEdge]:
        """Return the shortcuts for which no path at least as short was found."""
        return [
            ShortcutEdge(source, target, self.via_node[(source, target)], self.node)
            for source in self.sources
            for target in self.targets
            if source != target
            and self.witness[(source, target)] > self.via_node[(source, target)]
        ]


class WitnessSearch:
    """Finds the shortcuts needed when a node of a contraction graph is removed.

    ``contracted`` flags the nodes already contracted; it is shared with the
    caller and read on every search.
    """

    def __init__(
        self,
        graph: ContractionGraph,
        contracted: MutableSequence[bool] | None = None,
    ) -> None:
        self.graph = graph
        self.contracted = [False] * len(graph) if contracted is None else contracted

    def possible_shortcuts(self, node: int, deep: bool = True) -> ShortcutCandidates:
        """Compute the candidate shortcuts around ``node`` and their witnesses.

        A deep search explores more of the graph and so rules out more
        shortcuts, at a higher cost.
        """
        sources, targets, via_node = self._distances_via(node)
        was_contracted = self.contracted[node]
        self.contracted[node] = True
        try:
            witness = self._many_to_many(sources, targets, via_node, deep)
        finally:
            self.contracted[node] = was_contracted
        return ShortcutCandidates(node, sources, targets, via_node, witness)

    def _distances_via(self, node: int) -> tuple[list[int], list[int], dict[Pair, int]]:
        contracted = self.contracted
        incoming = self.graph.incoming_edges(node)
        outgoing = self.graph.outgoing_edges(node)

        via_node: dict[Pair, int] = {}
        for source, weight_in in incoming.items():
            if contracted[source]:
                continue
            for target, edge in outgoing.items():
                if source != target and not contracted[target]:
                    via_node[(source, target)] = weight_in + edge.weight

        sources = [source for source in incoming if not contracted[source]]
        targets = [target for target in outgoing if not contracted[target]]
        return sources, targets, via_node

    def _many_to_many(
        self,
        sources: Sequence[int],
        targets: Sequence[int],
        via_node: dict[Pair, int],
        deep: bool,
    ) -> dict[Pair, int]:
        # One backward edge from each target is kept in buckets, so reaching a
        # bucket owner immediately gives a path to the target.
        buckets: dict[int, list[tuple[int, int]]] = {}
        lowest = INFINITY
        for target in targets:
            for predecessor, weight in self.graph.incoming_edges(target).items():
                if not self.contracted[predecessor]:
                    buckets.setdefault(predecessor, []).append((target, weight))
                    lowest = min(lowest, weight)

        hop_limit, max_expanded = _DEEP_LIMITS if deep else _SHALLOW_LIMITS
        target_set = set(targets)

        witness: dict[Pair, int] = {}
        for source in sources:
            longest = max(
                (via_node[(source, target)] for target in targets if target != source),
                default=0,
            )
            # The bound wraps around like a 32-bit unsigned difference.
            bound = (longest - lowest) % (INFINITY + 1)
            distances = self._one_to_many(
                source, bound, buckets, target_set, hop_limit, max_expanded
            )
            for target in targets:
                witness[(source, target)] = distances.get(target, INFINITY)
        return witness

    def _one_to_many(
        self,
        source: int,
        bound: int,
        buckets: dict[int, list[tuple[int, int]]],
        target_set: set[int],
        hop_limit: int,
        max_expanded: int,
    ) -> dict[int, int]:
        contracted = self.contracted
        distance: dict[int, int] = {source: 0}
        order = itertools.count(1)
        heap = [(0, 0, source, 0)]
        found = 0
        expanded = 0

        while heap:
            weight, _, node, hops = heap[0]
            expanded += 1
            if expanded > max_expanded or weight > bound:
                break
            heapq.heappop(heap)
            if hops > hop_limit:
                continue
            if node in target_set:
                found += 1
                if found == len(target_set):
                    break

            for neighbour, edge in self.graph.outgoing_edges(node).items():
                for target, bucket_weight in buckets.get(neighbour, ()):
                    through_bucket = weight + edge.weight + bucket_weight
                    if through_bucket < distance.get(target, INFINITY):
                        distance[target] = through_bucket
                new_distance = weight + edge.weight
                if not contracted[neighbour] and new_distance < distance.get(neighbour, INFINITY):
                    distance[neighbour] = new_distance
                    heapq.heappush(heap, (new_distance, next(order), neighbour, hops + 1))

        return distance