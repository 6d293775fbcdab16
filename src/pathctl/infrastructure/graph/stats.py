"""StatsCalculator — degree and weight aggregates over a GraphStore.

Every undirected edge is stored on both endpoints, so the summed degrees
and weights are halved to get edge count and total weight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathctl.domain.types import GraphStats

if TYPE_CHECKING:
    from pathctl.infrastructure.graph.store import GraphStore


def compute_stats(store: GraphStore) -> GraphStats:
    """Scan *store* once and return its :class:`GraphStats`."""
    records = store.records()
    if not records:
        return GraphStats()

    total_degree = 0
    total_weight = 0
    max_degree = 0
    min_degree: int | None = None
    for node in records:
        degree = len(node.edges)
        total_degree += degree
        total_weight += sum(node.edges.values())
        max_degree = max(max_degree, degree)
        min_degree = degree if min_degree is None else min(min_degree, degree)

    return GraphStats(
        node_count=len(records),
        edge_count=total_degree // 2,
        avg_degree=total_degree / len(records),
        max_degree=max_degree,
        min_degree=min_degree or 0,
        total_weight=total_weight // 2,
    )
