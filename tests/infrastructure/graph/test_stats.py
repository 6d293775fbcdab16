"""Tests for compute_stats."""

from pathctl.domain.types import GraphStats
from pathctl.infrastructure.graph.stats import compute_stats
from pathctl.infrastructure.graph.store import GraphStore
from tests.conftest import TRIANGLE, add_edges


class TestComputeStats:
    def test_empty_graph(self, store: GraphStore) -> None:
        assert compute_stats(store) == GraphStats()

    def test_path_graph(self, store: GraphStore) -> None:
        add_edges(store, [(1, 2, 1), (2, 3, 1), (3, 4, 1)])
        stats = compute_stats(store)
        assert stats.node_count == 4
        assert stats.edge_count == 3
        assert stats.avg_degree == 1.5
        assert stats.max_degree == 2
        assert stats.min_degree == 1
        assert stats.total_weight == 3

    def test_weights_counted_once(self, store: GraphStore) -> None:
        add_edges(store, TRIANGLE)
        stats = compute_stats(store)
        assert stats.edge_count == 3
        assert stats.total_weight == 11
        assert stats.density == 1.0

    def test_duplicates_do_not_count(self, store: GraphStore) -> None:
        add_edges(store, [(1, 2, 4), (2, 1, 4), (1, 2, 4)])
        stats = compute_stats(store)
        assert stats.edge_count == 1
        assert stats.total_weight == 4

    def test_matches_networkx(self, store: GraphStore) -> None:
        add_edges(store, [(1, 2, 2), (2, 3, 3), (3, 1, 4), (3, 4, 1), (5, 6, 9)])
        g = store.to_networkx()
        stats = compute_stats(store)
        assert stats.edge_count == g.number_of_edges()
        assert stats.total_weight == g.size(weight="weight")
        assert stats.max_degree == max(d for _, d in g.degree())
