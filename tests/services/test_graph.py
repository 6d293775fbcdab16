"""Tests for GraphService — path queries and inspection."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from pathctl.config.settings import PathSettings
from pathctl.infrastructure.workspace import Workspace
from pathctl.services.graph import GraphService
from pathctl.services.telemetry import _current_span, disable_telemetry, enable_telemetry
from tests.conftest import SQUARE, TRIANGLE, add_edges


@pytest.fixture
def svc(workspace: Workspace) -> GraphService:
    return GraphService(workspace)


class TestPath:
    def test_found(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, [(1, 2, 1), (2, 3, 1), (1, 3, 10)])
        workspace.store.set_label(2, "Junction")
        result = svc.path(1, 3)
        assert result.ok
        assert result.op == "path"
        assert result.data["code"] == "found"
        assert result.data["reachable"] is True
        assert result.data["distance"] == 2
        assert result.data["hops"] == 2
        assert result.data["steps"] == [
            {"id": 1, "label": "1"},
            {"id": 2, "label": "Junction"},
            {"id": 3, "label": "3"},
        ]
        assert result.warnings == []

    def test_trivial(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        result = svc.path(2, 2)
        assert result.ok
        assert result.data["code"] == "found_trivial"
        assert result.data["distance"] == 0
        assert result.data["hops"] == 0

    def test_unreachable_is_ok(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, [(1, 2, 1), (3, 4, 1)])
        result = svc.path(1, 4)
        assert result.ok
        assert result.data["code"] == "unreachable"
        assert result.data["reachable"] is False
        assert result.data["distance"] is None
        assert result.data["steps"] == []
        assert "No path between 1 and 4" in result.warnings

    def test_unknown_nodes(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        result = svc.path(1, 999)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail["missing"] == [999]
        assert "999" in result.error.message

    def test_empty_graph(self, svc: GraphService) -> None:
        result = svc.path(1, 2)
        assert not result.ok
        assert result.error is not None
        assert result.error.detail["missing"] == [1, 2]

    def test_internal_error(self, workspace: Workspace, svc: GraphService) -> None:
        store = workspace.store
        add_edges(store, [(1, 2, 1), (2, 3, 1), (3, 4, 1)])
        workspace.engine.calculate(1)
        store.record(store.index_of(4)).parents[:] = [store.index_of(3)]
        store.record(store.index_of(3)).parents[:] = [store.index_of(4)]
        result = svc.path(1, 4)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INTERNAL_ERROR"

    def test_ties(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, SQUARE)
        result = svc.path(1, 4, ties=True)
        assert result.data["ties"] == {"4": [2, 3]}

    def test_no_ties_key_by_default(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, SQUARE)
        assert "ties" not in svc.path(1, 4).data

    def test_trace(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        svc.path(1, 3)  # warm the cache; trace must still record steps
        result = svc.path(1, 3, trace=True)
        trace = result.data["trace"]
        assert trace[0] == {"id": 1, "distance": 0, "final": False}
        assert trace[-1] == {"id": 1, "distance": 0, "final": True}
        assert len(trace) == 6

    def test_trace_truncated(self, tmp_path: Path) -> None:
        settings = PathSettings.from_cli(start_dir=tmp_path, output={"trace_limit": 2})
        ws = Workspace(settings)
        add_edges(ws.store, TRIANGLE)
        result = GraphService(ws).path(1, 3, trace=True)
        assert len(result.data["trace"]) == 2
        assert "Trace truncated to 2 of 6 steps" in result.warnings


class TestDistances:
    def test_table(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, SQUARE)
        workspace.store.add_edge(8, 9, 1)
        result = svc.distances(1)
        assert result.ok
        assert result.data["count"] == 6
        assert result.data["reachable"] == 4
        by_id = {item["id"]: item for item in result.data["items"]}
        assert by_id[1]["distance"] == 0
        assert by_id[1]["parents"] == []
        assert by_id[4]["distance"] == 2
        assert by_id[4]["parents"] == [2, 3]
        assert by_id[9]["distance"] is None

    def test_large_weights_stay_reachable(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, [(1, 2, 2_000_000_000), (2, 3, 1)])
        result = svc.distances(1)
        assert result.data["reachable"] == 3
        by_id = {item["id"]: item for item in result.data["items"]}
        assert by_id[2]["distance"] == 2_000_000_000
        assert by_id[3]["distance"] == 2_000_000_001
        assert by_id[3]["parents"] == [2]

    def test_unknown_source(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        result = svc.distances(42)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_empty_graph(self, svc: GraphService) -> None:
        result = svc.distances(1)
        assert result.error is not None
        assert result.error.code == "EMPTY_GRAPH"


class TestInspection:
    def test_neighbors(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        result = svc.neighbors(3)
        assert result.ok
        assert result.data["node_id"] == 3
        assert result.data["items"] == [
            {"id": 1, "label": "1", "weight": 5},
            {"id": 2, "label": "2", "weight": 1},
        ]

    def test_neighbors_unknown(self, svc: GraphService) -> None:
        result = svc.neighbors(5)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_nodes(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, [(7, 3, 1), (3, 5, 1)])
        result = svc.nodes()
        assert result.data["count"] == 3
        assert [item["id"] for item in result.data["items"]] == [7, 3, 5]
        assert result.data["items"][1] == {"id": 3, "label": "3", "index": 2, "degree": 2}

    def test_stats(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, [(1, 2, 1), (2, 3, 1), (3, 4, 1)])
        result = svc.stats()
        assert result.data == {
            "node_count": 4,
            "edge_count": 3,
            "avg_degree": 1.5,
            "max_degree": 2,
            "min_degree": 1,
            "total_weight": 3,
            "density": 0.5,
        }

    def test_stats_empty(self, svc: GraphService) -> None:
        result = svc.stats()
        assert result.ok
        assert result.data["node_count"] == 0


class TestTelemetry:
    @pytest.fixture(autouse=True)
    def _telemetry(self) -> Generator[None]:
        enable_telemetry()
        yield
        disable_telemetry()
        _current_span.set(None)

    def test_path_span_tree(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        result = svc.path(1, 3)
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "GraphService.path"
        child = tree["children"][0]
        assert child["name"] == "get_distance"
        assert child["annotations"] == {"cached": False, "nodes": 3}

    def test_cached_annotation(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        svc.path(1, 3)
        result = svc.path(1, 2)
        assert result.meta is not None
        assert result.meta["telemetry"]["children"][0]["annotations"]["cached"] is True

    def test_untraced_op_has_no_meta(self, workspace: Workspace, svc: GraphService) -> None:
        add_edges(workspace.store, TRIANGLE)
        assert svc.nodes().meta is None
