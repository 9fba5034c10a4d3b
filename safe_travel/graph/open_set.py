"""Open and closed sets of the A* search.

The open set pairs a map (node id -> SearchNode) with a binary heap
ordered by ``g + h``. Updating a node pushes a fresh heap entry and
bumps the node's version; entries carrying an older version are stale
and discarded when they reach the top of the heap. Every node in the map
has exactly one heap entry carrying its current version.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, Iterator, List, Optional, Tuple

from ..domain.errors import SearchInvariantError
from ..domain.models import SearchNode

# (f, insertion sequence, version, node id)
_Entry = Tuple[float, int, int, int]


class OpenSet:
    """Priority queue of discovered, unexpanded search nodes.

    Ties on ``f`` are popped in insertion order.
    """

    def __init__(self) -> None:
        self._nodes: Dict[int, SearchNode] = {}
        self._versions: Dict[int, int] = {}
        self._heap: List[_Entry] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self._nodes.values())

    def get(self, node_id: int) -> Optional[SearchNode]:
        return self._nodes.get(node_id)

    def upsert(self, search_node: SearchNode) -> None:
        """Insert a node, or reposition it after its cost changed."""
        node_id = search_node.node_id
        version = self._versions.get(node_id, 0) + 1
        self._versions[node_id] = version

        self._nodes[node_id] = search_node

        heapq.heappush(
            self._heap,
            (search_node.cost.f, next(self._counter), version, node_id),
        )

    def remove(self, node_id: int) -> Optional[SearchNode]:
        """Drop a node; its heap entries become stale."""
        search_node = self._nodes.pop(node_id, None)
        if search_node is not None:
            self._versions[node_id] = self._versions.get(node_id, 0) + 1
        return search_node

    def pop(self) -> SearchNode:
        """Remove and return the node with the smallest ``g + h``.

        Raises:
            IndexError: If the open set is empty.
        """
        while self._heap:
            _, _, version, node_id = heapq.heappop(self._heap)
            if self._versions.get(node_id) != version or node_id not in self._nodes:
                continue
            return self._nodes.pop(node_id)
        raise IndexError("pop from an empty open set")

    def check_consistency(self, full: bool = False) -> None:
        """Assert that the map and the heap agree.

        The quick check only bounds the heap size from below. With
        ``full`` every heap entry is inspected, which costs O(heap).

        Raises:
            SearchInvariantError: If a node has no current heap entry.
        """
        if len(self._heap) < len(self._nodes):
            raise SearchInvariantError(
                f"Open set out of sync: {len(self._nodes)} nodes, "
                f"{len(self._heap)} heap entries"
            )
        if not full:
            return

        current = sum(
            1
            for _, _, version, node_id in self._heap
            if node_id in self._nodes and self._versions.get(node_id) == version
        )
        if current != len(self._nodes):
            raise SearchInvariantError(
                f"Open set out of sync: {len(self._nodes)} nodes, "
                f"{current} current heap entries"
            )


class ClosedSet:
    """Expanded nodes whose cost is currently considered final."""

    def __init__(self) -> None:
        self._nodes: Dict[int, SearchNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def get(self, node_id: int) -> Optional[SearchNode]:
        return self._nodes.get(node_id)

    def add(self, search_node: SearchNode) -> None:
        self._nodes[search_node.node_id] = search_node

    def reopen(self, node_id: int) -> Optional[SearchNode]:
        """Take a node out of the closed set so it can be expanded again."""
        return self._nodes.pop(node_id, None)
