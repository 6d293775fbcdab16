"""IngestService — filling, extending, and exporting the workspace graph.

Loads are not transactional: when a line fails, the edges from earlier
lines stay in the graph and the failure result reports how many nodes
were loaded before the stop.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pathctl.domain.errors import ConflictError, PathctlError
from pathctl.infrastructure.loader import (
    BackgroundLoader,
    LoadReport,
    export_edges,
    export_graphml,
    load_file,
    load_labels,
)
from pathctl.services.base import BaseService
from pathctl.services.result import ServiceError, ServiceResult, failure
from pathctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathctl.infrastructure.loader import ProgressCallback

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("edgelist", "graphml")


class IngestService(BaseService):
    """Handles graph loading, manual edges, clearing, and export."""

    # ------------------------------------------------------------------
    # load
    # ------------------------------------------------------------------

    @traced
    def load(
        self,
        path: Path,
        *,
        labels: Path | None = None,
        replace: bool = True,
        background: bool = False,
        progress: ProgressCallback | None = None,
    ) -> ServiceResult:
        """Ingest an edge-list file, then optionally a label file.

        Args:
            path: Edge-list file.
            labels: Optional ``id<delim>label`` file applied after the edges.
            replace: Clear the current graph first.
            background: Parse on a worker thread (the call still waits).
            progress: Receives load progress as a fraction in [0, 1].
        """
        ws = self._workspace
        ingest = ws.settings.ingest
        path = Path(path)
        if replace:
            ws.reset()

        try:
            with trace_span("load_edges") as span:
                if background:
                    report = self._load_in_background(path, progress)
                else:
                    report = load_file(
                        ws.store,
                        path,
                        comments=ingest.comments,
                        progress=progress,
                        progress_every=ingest.progress_every,
                    )
                if span:
                    span.annotate("edges", report.edges_added)
        except OSError as exc:
            return failure(
                "load",
                "FILE_ERROR",
                f"Cannot read {path}: {exc.strerror or exc}",
                detail={"path": str(path)},
            )
        except PathctlError as exc:
            return self._partial_failure("load", path, exc)

        ws.source = path
        data = self._report_data(path, report)
        warnings: list[str] = []

        if labels is not None:
            try:
                applied, skipped = load_labels(ws.store, Path(labels), comments=ingest.comments)
            except OSError as exc:
                return failure(
                    "load",
                    "FILE_ERROR",
                    f"Cannot read {labels}: {exc.strerror or exc}",
                    detail={"path": str(labels)},
                    data=data,
                )
            except PathctlError as exc:
                return ServiceResult(
                    ok=False,
                    op="load",
                    data=data,
                    error=ServiceError.from_exception(exc),
                )
            data["labels_applied"] = applied
            if skipped:
                warnings.append(f"{skipped} label(s) refer to unknown nodes and were skipped")

        if report.duplicates:
            warnings.append(f"{report.duplicates} duplicate edge line(s) ignored")

        logger.debug("Loaded %s: %d nodes", path, report.node_count)
        return ServiceResult(ok=True, op="load", data=data, warnings=warnings)

    def load_configured(
        self,
        *,
        background: bool = False,
        progress: ProgressCallback | None = None,
    ) -> ServiceResult:
        """Load the graph (and labels) named by the workspace settings."""
        settings = self._workspace.settings
        graph_file = settings.effective_graph_file
        if graph_file is None:
            return failure(
                "load",
                "NO_GRAPH",
                "No graph given; pass --graph FILE, --edge A B W, "
                "or set [graph] file in pathctl.toml",
            )
        return self.load(
            graph_file,
            labels=settings.effective_labels_file,
            background=background,
            progress=progress,
        )

    def _load_in_background(self, path: Path, progress: ProgressCallback | None) -> LoadReport:
        ingest = self._workspace.settings.ingest
        with BackgroundLoader(
            comments=ingest.comments, progress_every=ingest.progress_every
        ) as loader:
            future = loader.submit(self._workspace.store, path, progress=progress)
            try:
                return future.result()
            except KeyboardInterrupt:
                loader.cancel()
                stopped = future.exception()
                if stopped is None:
                    return future.result()
                raise stopped from None

    def _partial_failure(self, op: str, path: Path | None, exc: PathctlError) -> ServiceResult:
        store = self._workspace.store
        data: dict[str, Any] = {"node_count": store.node_count()}
        if path is not None:
            data["path"] = str(path)
        result = ServiceResult(
            ok=False,
            op=op,
            data=data,
            error=ServiceError.from_exception(exc),
            warnings=(
                [f"{store.node_count()} node(s) loaded before the failure remain in the graph"]
                if store.node_count()
                else []
            ),
        )
        logger.debug("Load stopped: %s", exc)
        return result

    @staticmethod
    def _report_data(path: Path | None, report: LoadReport) -> dict[str, Any]:
        data: dict[str, Any] = {
            "lines_read": report.lines_read,
            "edges_added": report.edges_added,
            "duplicates": report.duplicates,
            "node_count": report.node_count,
        }
        if path is not None:
            data = {"path": str(path), **data}
        return data

    # ------------------------------------------------------------------
    # add_edge
    # ------------------------------------------------------------------

    def add_edge(self, id_a: int, id_b: int, weight: int) -> ServiceResult:
        """Add one undirected edge to the workspace graph."""
        store = self._workspace.store
        try:
            created = store.add_edge(id_a, id_b, weight)
        except ConflictError as exc:
            return ServiceResult(ok=False, op="add_edge", error=ServiceError.from_exception(exc))
        except ValueError as exc:
            return failure("add_edge", "INVALID_INPUT", str(exc))
        return ServiceResult(
            ok=True,
            op="add_edge",
            data={
                "id_a": id_a,
                "id_b": id_b,
                "weight": weight,
                "created": created,
                "node_count": store.node_count(),
            },
        )

    # ------------------------------------------------------------------
    # export
    # ------------------------------------------------------------------

    @traced
    def export(self, path: Path, *, fmt: str = "edgelist") -> ServiceResult:
        """Write the graph to *path* as a tab-separated edge list or GraphML."""
        if fmt not in EXPORT_FORMATS:
            return failure(
                "export",
                "INVALID_INPUT",
                f"Unknown export format '{fmt}' (expected one of: {', '.join(EXPORT_FORMATS)})",
            )
        path = Path(path)
        store = self._workspace.store
        try:
            if fmt == "graphml":
                count = export_graphml(store, path)
            else:
                count = export_edges(store, path)
        except OSError as exc:
            return failure(
                "export",
                "FILE_ERROR",
                f"Cannot write {path}: {exc.strerror or exc}",
                detail={"path": str(path)},
            )
        return ServiceResult(
            ok=True,
            op="export",
            data={
                "path": str(path),
                "format": fmt,
                "edge_count": count,
                "node_count": store.node_count(),
            },
        )
