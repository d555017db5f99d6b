"""Building a contraction hierarchy by contracting the nodes of a graph one by one."""

from __future__ import annotations

import logging
import time

from hierroute.contraction_graph import ContractionGraph, ShortcutEdge
from hierroute.edge_difference import EdgeDifference
from hierroute.priority_queue import ContractionQueue
from hierroute.witness import WitnessSearch

_log = logging.getLogger(__name__)


class CHPreprocessor:
    """Contracts every node of a :class:`ContractionGraph` and records the shortcuts.

    After :meth:`preprocess` every node has its contraction rank (1 for the
    first contracted node) and the graph holds exactly the shortcuts that were
    created; the original edges are removed along the way, so they have to be
    combined with the shortcuts again to obtain the full hierarchy.
    """

    def __init__(self, graph: ContractionGraph) -> None:
        self.graph = graph
        self.shortcuts: list[ShortcutEdge] = []
        self.contracted: list[bool] = []
        self.degrees: list[int] = []

    def preprocess(self) -> list[ShortcutEdge]:
        """Contract all nodes and return the shortcuts in the order they were created."""
        graph = self.graph
        nodes = len(graph)
        started = time.perf_counter()
        _log.info("Started preprocessing!")

        self.shortcuts = []
        self.contracted = [False] * nodes
        self.degrees = [0] * nodes
        self._priorities = EdgeDifference(nodes)
        self._witness = WitnessSearch(graph, self.contracted)
        queue = ContractionQueue(nodes)

        self._initialize_queue(queue)
        self._contract_nodes(queue)
        self._reinsert_shortcuts()

        _log.info(
            "Contraction Hierarchies preprocessing took %.3f s",
            time.perf_counter() - started,
        )
        _log.info(
            "During the preprocessing process, %d shortcuts were added into the graph.",
            len(self.shortcuts),
        )
        return list(self.shortcuts)

    def _shortcut_count(self, node: int) -> int:
        return len(self._witness.possible_shortcuts(node, True).needed())

    def _initialize_queue(self, queue: ContractionQueue) -> None:
        _log.debug("Initializing priority queue.")
        for node in range(len(self.graph)):
            shortcuts = self._shortcut_count(node)
            self.degrees[node] = self.graph.degree(node)
            queue.push_only(
                node, self._priorities.difference(None, node, shortcuts, self.degrees[node])
            )
        queue.build_heap()
        _log.debug("Priority queue initialized.")

    def _contract_nodes(self, queue: ContractionQueue) -> None:
        graph = self.graph
        nodes = len(graph)
        rank = 1
        while queue:
            current = queue.front()
            queue.pop()

            candidates = self._witness.possible_shortcuts(current.id, True)
            needed = candidates.needed()
            new_weight = self._priorities.difference(
                None, current.id, len(needed), self.degrees[current.id]
            )

            if queue and new_weight > queue.front().weight:
                # Its priority went up meanwhile; put it back and try the new minimum.
                queue.insert(current.id, new_weight)
                continue

            x = current.id
            self.contracted[x] = True
            neighbours = self._uncontracted_neighbours(x)
            for neighbour in self._neighbour_occurrences(x):
                self.degrees[neighbour] -= 1

            for shortcut in needed:
                self.degrees[shortcut.source_node] += 1
                self.degrees[shortcut.target_node] += 1
                if graph.add_shortcut_edge(
                    shortcut.source_node, shortcut.target_node, shortcut.weight, x
                ):
                    self.shortcuts.append(shortcut)

            for source in candidates.sources:
                graph.remove_edge(source, x)
            for target in candidates.targets:
                graph.remove_edge(x, target)

            self._update_priorities(x, neighbours, queue)
            graph.set_rank(x, rank)
            rank += 1

            remaining = nodes - rank
            if (remaining < 2000 and rank % 10 == 0) or rank % 1000 == 0:
                _log.debug("Contracted %d nodes!", rank)

        _log.debug("All nodes contracted!")

    def _neighbour_occurrences(self, x: int) -> list[int]:
        """Uncontracted neighbours of ``x``, once per incident edge."""
        incoming = self.graph.incoming_edges(x)
        outgoing = self.graph.outgoing_edges(x)
        return [node for node in (*incoming, *outgoing) if not self.contracted[node]]

    def _uncontracted_neighbours(self, x: int) -> list[int]:
        return list(dict.fromkeys(self._neighbour_occurrences(x)))

    def _update_priorities(
        self, x: int, neighbours: list[int], queue: ContractionQueue
    ) -> None:
        for neighbour in neighbours:
            if self.contracted[neighbour]:
                continue
            shortcuts = self._shortcut_count(neighbour)
            priority = self._priorities.difference(
                x, neighbour, shortcuts, self.degrees[neighbour]
            )
            queue.change_value(neighbour, priority)

    def _reinsert_shortcuts(self) -> None:
        for shortcut in self.shortcuts:
            self.graph.add_shortcut_edge(
                shortcut.source_node, shortcut.target_node, shortcut.weight, shortcut.middle_node
            )


def preprocess(graph: ContractionGraph) -> list[ShortcutEdge]:
    """Contract every node of ``graph`` and return the shortcuts that were created."""
    return CHPreprocessor(graph).preprocess()