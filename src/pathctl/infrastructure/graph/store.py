"""GraphStore — index-addressed arena of nodes with symmetric weighted adjacency.

External identifiers are arbitrary 64-bit integers. Each new identifier
gets the next dense index, starting at 1; slot 0 is a reserved sentinel so
that "no index" can be represented as 0 by callers that need it.

Every successful ``add_edge`` and every ``clear`` notifies the registered
invalidation listeners. The PathEngine subscribes one so that its memoized
computation never outlives a graph mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pathctl.domain.errors import ConflictError
from pathctl.domain.types import UNREACHABLE, check_int64

if TYPE_CHECKING:
    import networkx as nx

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NodeRecord:
    """One arena slot: identity, label, adjacency, and SSSP scratch state."""

    node_id: int
    label: str
    edges: dict[int, int] = field(default_factory=dict)
    distance: int = UNREACHABLE
    visited: bool = False
    parents: list[int] = field(default_factory=list)

    def reset(self) -> None:
        """Return the SSSP scratch fields to their initial state."""
        self.distance = UNREACHABLE
        self.visited = False
        self.parents.clear()

    def sorted_edges(self) -> list[tuple[int, int]]:
        """Adjacency as ``(neighbor_index, weight)`` in ascending index order."""
        return sorted(self.edges.items())


def _sentinel() -> NodeRecord:
    return NodeRecord(node_id=0, label="")


class GraphStore:
    """Owns nodes, labels, and the undirected adjacency table."""

    def __init__(self) -> None:
        self._nodes: list[NodeRecord] = [_sentinel()]
        self._index: dict[int, int] = {}
        self._listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register *listener* to be called after every mutation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_edge(self, id_a: int, id_b: int, weight: int) -> bool:
        """Insert the undirected edge ``id_a — id_b`` with *weight*.

        Unknown identifiers are registered first, with their label
        defaulted to the decimal identifier. Re-adding an existing edge
        with the same weight is accepted and changes nothing.

        Returns:
            True if a new edge was stored, False if it already existed.

        Raises:
            ConflictError: The pair already has a different weight. The
                stored weight is left as it was.
            ValueError: An identifier or the weight overflows int64.
        """
        check_int64(id_a, "node id")
        check_int64(id_b, "node id")
        check_int64(weight, "weight")

        idx_a = self._index.get(id_a)
        idx_b = self._index.get(id_b)
        if idx_a is not None and idx_b is not None:
            existing = self._nodes[idx_a].edges.get(idx_b)
            if existing is not None and existing != weight:
                raise ConflictError(id_a, id_b, existing, weight)
            reverse = self._nodes[idx_b].edges.get(idx_a)
            if reverse is not None and reverse != weight:
                raise ConflictError(id_b, id_a, reverse, weight)

        if idx_a is None:
            idx_a = self._register(id_a)
        if idx_b is None:
            # a self-loop on a new id must reuse the record just created
            idx_b = idx_a if id_b == id_a else self._register(id_b)

        node_a = self._nodes[idx_a]
        node_b = self._nodes[idx_b]
        created = idx_b not in node_a.edges
        node_a.edges.setdefault(idx_b, weight)
        node_b.edges.setdefault(idx_a, weight)

        self._notify()
        return created

    def _register(self, node_id: int) -> int:
        index = len(self._nodes)
        self._nodes.append(NodeRecord(node_id=node_id, label=str(node_id)))
        self._index[node_id] = index
        return index

    def set_label(self, node_id: int, text: str) -> bool:
        """Set the display label of a known node.

        An empty *text* restores the default (the decimal identifier).
        Returns False, changing nothing, if *node_id* is unknown.
        """
        index = self._index.get(node_id)
        if index is None:
            return False
        self._nodes[index].label = text if text else str(node_id)
        return True

    def clear(self) -> None:
        """Drop all nodes, edges, and labels and restart index allocation."""
        self._nodes = [_sentinel()]
        self._index.clear()
        logger.debug("Graph store cleared")
        self._notify()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def index_of(self, node_id: int) -> int | None:
        return self._index.get(node_id)

    def id_of(self, index: int) -> int | None:
        if 1 <= index < len(self._nodes):
            return self._nodes[index].node_id
        return None

    def label(self, node_id: int) -> str:
        """Return the label of *node_id*, or ``""`` if the node is unknown."""
        index = self._index.get(node_id)
        if index is None:
            return ""
        return self._nodes[index].label

    def neighbors(self, node_id: int) -> dict[int, int]:
        """Return ``{neighbor_id: weight}`` in index order (empty if unknown)."""
        index = self._index.get(node_id)
        if index is None:
            return {}
        return {self._nodes[i].node_id: w for i, w in self._nodes[index].sorted_edges()}

    def all_ids(self) -> list[int]:
        """All identifiers in insertion (index) order."""
        return [node.node_id for node in self._nodes[1:]]

    def node_count(self) -> int:
        return len(self._nodes) - 1

    def __len__(self) -> int:
        return self.node_count()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def record(self, index: int) -> NodeRecord:
        """Arena access by index for the engine and statistics."""
        if not 1 <= index < len(self._nodes):
            msg = f"Index {index} is outside 1..{self.node_count()}"
            raise IndexError(msg)
        return self._nodes[index]

    def records(self) -> list[NodeRecord]:
        """All live node records in index order (sentinel excluded)."""
        return self._nodes[1:]

    def edges(self) -> Iterator[tuple[int, int, int]]:
        """Yield each undirected edge once as ``(id_a, id_b, weight)``.

        ``id_a`` is the endpoint with the lower index; self-loops appear once.
        """
        for index, node in enumerate(self._nodes[1:], start=1):
            for other, weight in node.sorted_edges():
                if other >= index:
                    yield node.node_id, self._nodes[other].node_id, weight

    def to_networkx(self) -> nx.Graph[int]:
        """Build an undirected NetworkX graph mirroring this store.

        Nodes carry a ``label`` attribute and edges a ``weight`` attribute.
        Isolated nodes are included.
        """
        import networkx as nx

        g: nx.Graph[int] = nx.Graph()
        for node in self._nodes[1:]:
            g.add_node(node.node_id, label=node.label)
        for id_a, id_b, weight in self.edges():
            g.add_edge(id_a, id_b, weight=weight)
        return g
