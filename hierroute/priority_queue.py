"""A binary min-heap over node ids whose priorities can be changed in place."""

from __future__ import annotations

from hierroute.structures import CHNode


class ContractionQueue:
    """Min-heap of nodes keyed by contraction priority, with position tracking."""

    def __init__(self, nodes: int) -> None:
        self._content: list[CHNode] = []
        self._position: list[int | None] = [None] * nodes

    def __len__(self) -> int:
        return len(self._content)

    def insert(self, node: int, weight: int) -> None:
        """Add a node and move it to its place in the heap."""
        self.push_only(node, weight)
        self._bubble_up(len(self._content) - 1)

    def push_only(self, node: int, weight: int) -> None:
        """Append a node without restoring heap order; call build_heap later."""
        self._content.append(CHNode(node, weight))
        self._position[node] = len(self._content) - 1

    def change_value(self, node: int, weight: int) -> None:
        """Set a new priority for a queued node and restore heap order."""
        position = self._position[node]
        if position is None:
            raise KeyError(node)
        entry = self._content[position]
        if entry.weight == weight:
            return
        grew = entry.weight < weight
        entry.weight = weight
        if grew:
            self._bubble_down(position)
        else:
            self._bubble_up(position)

    def front(self) -> CHNode:
        """Return a copy of the entry with the lowest priority."""
        if not self._content:
            raise IndexError("front of an empty queue")
        top = self._content[0]
        return CHNode(top.id, top.weight)

    def pop(self) -> None:
        """Remove the entry with the lowest priority."""
        if not self._content:
            raise IndexError("pop from an empty queue")
        self._swap(0, len(self._content) - 1)
        removed = self._content.pop()
        self._position[removed.id] = None
        self._bubble_down(0)

    def build_heap(self) -> None:
        """Restore heap order after a series of push_only calls."""
        for index in reversed(range(len(self._content) // 2)):
            self._bubble_down(index)

    def _bubble_down(self, index: int) -> None:
        content = self._content
        size = len(content)
        cur = index
        while cur * 2 + 1 < size:
            left = cur * 2 + 1
            right = left + 1
            if right < size:
                lower = left if content[left].weight < content[right].weight else right
            else:
                lower = left
            if content[cur].weight < content[lower].weight:
                return
            self._swap(cur, lower)
            cur = lower

    def _bubble_up(self, index: int) -> None:
        content = self._content
        cur = index
        while cur != 0:
            father = (cur - 1) // 2
            if content[cur].weight >= content[father].weight:
                return
            self._swap(cur, father)
            cur = father

    def _swap(self, a: int, b: int) -> None:
        content = self._content
        content[a], content[b] = content[b], content[a]
        self._position[content[a].id] = a
        self._position[content[b].id] = b