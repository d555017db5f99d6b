"""Node priorities for the contraction order."""

from __future__ import annotations


class EdgeDifference:
    """Computes the edge difference of nodes, adjusted by contracted neighbours.

    The priority of a node is the number of shortcuts its contraction would add,
    minus its degree, plus the number of its neighbours already contracted.
    """

    def __init__(self, nodes: int) -> None:
        self._neighbours_contracted = [0] * nodes
        self._previous_contracted: list[int | None] = [None] * nodes

    def difference(
        self,
        contracted_node: int | None,
        node: int,
        possible_shortcuts: int,
        degree: int,
    ) -> int:
        """Return the priority of ``node``.

        ``contracted_node`` is the neighbour contracted just now, or None when
        the priority is computed without a preceding contraction.
        """
        if not 0 <= node < len(self._neighbours_contracted):
            raise IndexError(node)
        if contracted_node is not None and contracted_node != self._previous_contracted[node]:
            self._neighbours_contracted[node] += 1
            self._previous_contracted[node] = contracted_node
        return self._neighbours_contracted[node] + possible_shortcuts - degree