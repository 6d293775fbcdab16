"""Tests for GraphStore — identity, symmetric adjacency, labels, export views."""

from __future__ import annotations

import pytest

from pathctl.domain.errors import ConflictError
from pathctl.infrastructure.graph.store import GraphStore
from tests.conftest import TRIANGLE, add_edges


class TestAddEdge:
    def test_registers_nodes_in_order(self, store: GraphStore) -> None:
        store.add_edge(10, 20, 3)
        store.add_edge(20, 5, 1)
        assert store.all_ids() == [10, 20, 5]
        assert store.index_of(10) == 1
        assert store.index_of(5) == 3
        assert store.id_of(2) == 20

    def test_symmetric(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 7)
        assert store.neighbors(1) == {2: 7}
        assert store.neighbors(2) == {1: 7}

    def test_returns_created(self, store: GraphStore) -> None:
        assert store.add_edge(1, 2, 7) is True
        assert store.add_edge(2, 1, 7) is False

    def test_same_weight_is_idempotent(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 7)
        store.add_edge(1, 2, 7)
        assert store.node_count() == 2
        assert list(store.edges()) == [(1, 2, 7)]

    def test_conflict_preserves_weight(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 7)
        with pytest.raises(ConflictError) as excinfo:
            store.add_edge(2, 1, 9)
        assert excinfo.value.existing_weight == 7
        assert excinfo.value.new_weight == 9
        assert store.neighbors(1) == {2: 7}
        assert store.neighbors(2) == {1: 7}

    def test_conflict_adds_no_nodes(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 7)
        with pytest.raises(ConflictError):
            store.add_edge(1, 2, 8)
        assert store.node_count() == 2

    def test_self_loop(self, store: GraphStore) -> None:
        store.add_edge(4, 4, 2)
        assert store.node_count() == 1
        assert store.neighbors(4) == {4: 2}
        assert list(store.edges()) == [(4, 4, 2)]

    def test_self_loop_on_new_id_registers_once(self, store: GraphStore) -> None:
        store.add_edge(4, 4, 0)
        assert store.all_ids() == [4]
        assert store.index_of(4) == 1
        store.add_edge(4, 5, 1)
        assert store.index_of(5) == 2
        assert store.neighbors(4) == {4: 0, 5: 1}

    def test_negative_and_large_ids(self, store: GraphStore) -> None:
        store.add_edge(-(2**63), 2**63 - 1, 0)
        assert -(2**63) in store
        assert 2**63 - 1 in store

    def test_overflow_rejected(self, store: GraphStore) -> None:
        with pytest.raises(ValueError):
            store.add_edge(2**63, 1, 1)
        with pytest.raises(ValueError):
            store.add_edge(1, 2, -(2**63) - 1)
        assert store.node_count() == 0


class TestInvalidation:
    def test_listener_called_on_add(self, store: GraphStore) -> None:
        calls: list[int] = []
        store.subscribe(lambda: calls.append(1))
        store.add_edge(1, 2, 3)
        store.add_edge(1, 2, 3)
        assert len(calls) == 2

    def test_listener_not_called_on_conflict(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 3)
        calls: list[int] = []
        store.subscribe(lambda: calls.append(1))
        with pytest.raises(ConflictError):
            store.add_edge(1, 2, 4)
        assert calls == []

    def test_listener_called_on_clear(self, store: GraphStore) -> None:
        calls: list[int] = []
        store.subscribe(lambda: calls.append(1))
        store.clear()
        assert calls == [1]


class TestLabels:
    def test_default_label_is_decimal_id(self, store: GraphStore) -> None:
        store.add_edge(-5, 12, 1)
        assert store.label(-5) == "-5"
        assert store.label(12) == "12"

    def test_set_label(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 1)
        assert store.set_label(1, "Home") is True
        assert store.label(1) == "Home"

    def test_empty_label_restores_default(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 1)
        store.set_label(1, "Home")
        store.set_label(1, "")
        assert store.label(1) == "1"

    def test_unknown_node(self, store: GraphStore) -> None:
        assert store.set_label(99, "Nowhere") is False
        assert store.label(99) == ""
        assert 99 not in store


class TestLookup:
    def test_neighbors_in_index_order(self, store: GraphStore) -> None:
        store.add_edge(1, 30, 1)
        store.add_edge(1, 20, 2)
        store.add_edge(20, 30, 3)
        # 30 got index 2 before 20 got index 3
        assert list(store.neighbors(1)) == [30, 20]

    def test_neighbors_unknown(self, store: GraphStore) -> None:
        assert store.neighbors(42) == {}

    def test_id_of_bounds(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 1)
        assert store.id_of(0) is None
        assert store.id_of(3) is None

    def test_record_bounds(self, store: GraphStore) -> None:
        store.add_edge(1, 2, 1)
        assert store.record(1).node_id == 1
        with pytest.raises(IndexError):
            store.record(0)

    def test_len_and_contains(self, store: GraphStore) -> None:
        add_edges(store, TRIANGLE)
        assert len(store) == 3
        assert 2 in store
        assert "2" not in store


class TestClear:
    def test_clear_restarts_indices(self, store: GraphStore) -> None:
        add_edges(store, TRIANGLE)
        store.clear()
        assert store.node_count() == 0
        assert store.all_ids() == []
        store.add_edge(7, 8, 1)
        assert store.index_of(7) == 1


class TestViews:
    def test_edges_once_each(self, store: GraphStore) -> None:
        add_edges(store, TRIANGLE)
        assert sorted(store.edges()) == sorted(TRIANGLE)

    def test_to_networkx(self, store: GraphStore) -> None:
        add_edges(store, TRIANGLE)
        store.set_label(1, "A")
        g = store.to_networkx()
        assert g.number_of_nodes() == 3
        assert g.number_of_edges() == 3
        assert g.nodes[1]["label"] == "A"
        assert g[2][3]["weight"] == 1
