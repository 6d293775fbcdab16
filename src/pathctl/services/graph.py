"""GraphService — shortest paths, distance tables, and graph inspection.

All operations read the workspace graph; none of them mutate it. Path
queries go through the workspace's PathEngine, so repeated queries from
the same source reuse the memoized computation.
"""

from __future__ import annotations

from typing import Any

from pathctl.domain.errors import PathctlError
from pathctl.domain.types import ResultCode
from pathctl.infrastructure.graph.observer import RecordingObserver
from pathctl.infrastructure.graph.stats import compute_stats
from pathctl.services.base import BaseService
from pathctl.services.result import ServiceError, ServiceResult, failure
from pathctl.services.telemetry import trace_span, traced


class GraphService(BaseService):
    """Handles path queries and graph inspection."""

    # ------------------------------------------------------------------
    # path: shortest path between two nodes
    # ------------------------------------------------------------------

    @traced
    def path(
        self,
        source_id: int,
        target_id: int,
        *,
        trace: bool = False,
        ties: bool = False,
    ) -> ServiceResult:
        """Find the shortest path from *source_id* to *target_id*.

        An unreachable target is a successful query whose ``reachable``
        flag is False. Unknown nodes and broken backtracking are errors.

        Args:
            source_id: Starting node.
            target_id: Destination node.
            trace: Include every engine visitation step (recomputes).
            ties: Include all equal-cost parents of nodes on the path.
        """
        engine = self._workspace.engine
        store = self._workspace.store
        recorder = RecordingObserver() if trace else None
        if trace:
            engine.invalidate()

        with trace_span("get_distance") as span:
            cached = engine.is_valid_for(source_id)
            result = engine.get_distance(source_id, target_id, recorder)
            if span:
                span.annotate("cached", cached)
                span.annotate("nodes", store.node_count())

        if result.code is ResultCode.NODE_NOT_FOUND:
            missing = [nid for nid in (source_id, target_id) if nid not in store]
            return failure(
                "path",
                "NOT_FOUND",
                f"Node {', '.join(str(m) for m in missing)} not found in graph",
                detail={"missing": missing},
            )
        if result.code is ResultCode.INTERNAL_ERROR:
            return failure(
                "path",
                "INTERNAL_ERROR",
                f"Could not backtrack from {target_id} to {source_id}; graph state is inconsistent",
                detail={"source_id": source_id, "target_id": target_id},
            )

        data: dict[str, Any] = {
            "source_id": source_id,
            "target_id": target_id,
            "code": str(result.code),
            "reachable": result.found,
            "distance": result.distance if result.found else None,
            "hops": max(len(result.path) - 1, 0),
            "steps": [self._node_entry(nid) for nid in result.path],
        }
        warnings: list[str] = []
        if not result.found:
            warnings.append(f"No path between {source_id} and {target_id}")

        if ties and result.found:
            data["ties"] = {
                str(nid): parents
                for nid in result.path[1:]
                if len(parents := engine.parents_of(nid)) > 1
            }

        if recorder is not None:
            limit = self._workspace.settings.output.trace_limit
            data["trace"] = [
                {
                    "id": store.id_of(index),
                    "distance": distance,
                    "final": final,
                }
                for index, distance, final in recorder.steps[:limit]
            ]
            if len(recorder.steps) > limit:
                warnings.append(f"Trace truncated to {limit} of {len(recorder.steps)} steps")

        return ServiceResult(ok=True, op="path", data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # distances: full single-source table
    # ------------------------------------------------------------------

    @traced
    def distances(self, source_id: int) -> ServiceResult:
        """Shortest distance and recorded parents for every node from *source_id*."""
        engine = self._workspace.engine
        store = self._workspace.store

        if not engine.is_valid_for(source_id):
            try:
                with trace_span("calculate"):
                    engine.calculate(source_id)
            except PathctlError as exc:
                return ServiceResult(
                    ok=False, op="distances", error=ServiceError.from_exception(exc)
                )

        items: list[dict[str, Any]] = []
        reachable = 0
        for node_id in store.all_ids():
            distance = engine.distance_to(node_id)
            found = engine.reached(node_id)
            if found:
                reachable += 1
            items.append(
                self._node_entry(
                    node_id,
                    distance=distance if found else None,
                    parents=engine.parents_of(node_id) if node_id != source_id else [],
                )
            )

        return ServiceResult(
            ok=True,
            op="distances",
            data={
                "source_id": source_id,
                "count": len(items),
                "reachable": reachable,
                "items": items,
            },
        )

    # ------------------------------------------------------------------
    # neighbors / nodes
    # ------------------------------------------------------------------

    def neighbors(self, node_id: int) -> ServiceResult:
        """List the direct neighbors of *node_id* with edge weights."""
        store = self._workspace.store
        if node_id not in store:
            return failure(
                "neighbors",
                "NOT_FOUND",
                f"Node {node_id} not found in graph",
                detail={"node_id": node_id},
            )
        items = [
            self._node_entry(other, weight=weight)
            for other, weight in store.neighbors(node_id).items()
        ]
        return ServiceResult(
            ok=True,
            op="neighbors",
            data={"node_id": node_id, "count": len(items), "items": items},
        )

    def nodes(self) -> ServiceResult:
        """List every node in insertion order with its degree."""
        store = self._workspace.store
        items = [
            self._node_entry(record.node_id, index=index, degree=len(record.edges))
            for index, record in enumerate(store.records(), start=1)
        ]
        return ServiceResult(ok=True, op="nodes", data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # stats
    # ------------------------------------------------------------------

    @traced
    def stats(self) -> ServiceResult:
        """Degree, edge, and weight aggregates for the whole graph."""
        stats = compute_stats(self._workspace.store)
        return ServiceResult(ok=True, op="stats", data=stats.to_dict())
