"""Edge-list ingestion and export.

Input format: one edge per non-empty line, ``id1 id2 weight``. The field
delimiter is chosen per line: tab if the line has one, else comma, else
semicolon, else runs of spaces. Extra fields after the third are ignored.

Ingestion is not transactional. The first bad line aborts the load, and
edges applied from earlier lines stay in the store.

:class:`BackgroundLoader` runs a file load on a worker thread. The caller
owns serialization: nothing may touch the store until the returned future
is done.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from pathctl.domain.errors import ConflictError, IngestCancelled, IngestError

if TYPE_CHECKING:
    from pathctl.infrastructure.graph.store import GraphStore

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")

type ProgressCallback = Callable[[float], object]

DEFAULT_PROGRESS_EVERY = 1000


@dataclass(frozen=True)
class LoadReport:
    """Summary of a completed ingestion."""

    lines_read: int
    edges_added: int
    duplicates: int
    node_count: int


# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------


def split_fields(line: str, *, maxsplit: int = -1) -> list[str]:
    """Split *line* on its detected delimiter, dropping empty fields."""
    for delimiter in ("\t", ",", ";"):
        if delimiter in line:
            parts = line.split(delimiter, maxsplit)
            break
    else:
        parts = line.split(None, maxsplit)
    return [p.strip() for p in parts if p.strip()]


def parse_edge_line(line: str, line_number: int) -> tuple[int, int, int]:
    """Parse one stripped, non-empty line into ``(id1, id2, weight)``.

    Raises:
        IngestError: Fewer than three fields, or a field is not an integer.
    """
    fields = split_fields(line)
    if len(fields) < 3:
        raise IngestError(
            line_number,
            f"expected 3 fields (id1 id2 weight), found {len(fields)}",
        )
    values: list[int] = []
    for name, raw in zip(("id1", "id2", "weight"), fields[:3], strict=True):
        if not _INTEGER.fullmatch(raw):
            raise IngestError(line_number, f"{name} is not an integer: {raw!r}")
        values.append(int(raw))
    return values[0], values[1], values[2]


def _decoded(fh: BinaryIO) -> Iterator[str]:
    """Decode *fh* one line at a time as UTF-8."""
    for number, raw in enumerate(fh, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise IngestError(number, f"not valid UTF-8 (byte {exc.start})") from exc


def _meaningful(lines: Iterable[str], *, comments: bool) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, stripped_line)`` for content lines."""
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if comments and line.startswith("#"):
            continue
        yield number, line


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_lines(
    store: GraphStore,
    lines: Iterable[str],
    *,
    comments: bool = True,
    progress: ProgressCallback | None = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    total_bytes: int = 0,
    cancel: threading.Event | None = None,
) -> LoadReport:
    """Apply every edge in *lines* to *store*.

    Args:
        store: Target graph store (mutated in place).
        lines: Raw lines, with or without trailing newlines.
        comments: Skip lines starting with ``#``.
        progress: Called with a fraction in [0, 1] every *progress_every*
            lines (when *total_bytes* is known) and with 1.0 at the end.
        total_bytes: Input size used for the progress fraction.
        cancel: When set, loading stops before the next line.

    Raises:
        IngestError: A line is malformed.
        ConflictError: A line contradicts an existing weight; its
            ``line_number`` is filled in.
        IngestCancelled: *cancel* was set.
    """
    added = 0
    duplicates = 0
    lines_read = 0
    consumed = 0
    last_report = 0

    for number, raw in enumerate(lines, start=1):
        if cancel is not None and cancel.is_set():
            raise IngestCancelled(lines_read)
        lines_read = number
        consumed += len(raw.encode("utf-8")) + (0 if raw.endswith("\n") else 1)

        line = raw.strip()
        if not line or (comments and line.startswith("#")):
            continue

        id_a, id_b, weight = parse_edge_line(line, number)
        try:
            created = store.add_edge(id_a, id_b, weight)
        except ConflictError as exc:
            exc.line_number = number
            raise
        except ValueError as exc:
            raise IngestError(number, str(exc)) from exc
        if created:
            added += 1
        else:
            duplicates += 1

        if progress is not None and number - last_report >= progress_every:
            last_report = number
            progress(min(consumed / total_bytes, 1.0) if total_bytes > 0 else 0.0)

    if progress is not None:
        progress(1.0)

    report = LoadReport(
        lines_read=lines_read,
        edges_added=added,
        duplicates=duplicates,
        node_count=store.node_count(),
    )
    logger.debug(
        "Loaded %d edges (%d duplicates) from %d lines",
        report.edges_added,
        report.duplicates,
        report.lines_read,
    )
    return report


def load_text(store: GraphStore, text: str, *, comments: bool = True) -> LoadReport:
    """Ingest pasted edge-list *text* (same rules as files)."""
    return load_lines(store, text.splitlines(), comments=comments)


def load_file(
    store: GraphStore,
    path: Path,
    *,
    comments: bool = True,
    progress: ProgressCallback | None = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    cancel: threading.Event | None = None,
) -> LoadReport:
    """Ingest the edge-list file at *path* (UTF-8).

    Raises:
        OSError: The file cannot be opened or read.
        IngestError: A line is not valid UTF-8.
        IngestError, ConflictError, IngestCancelled: See :func:`load_lines`.
    """
    path = Path(path)
    total = path.stat().st_size
    with path.open("rb") as fh:
        return load_lines(
            store,
            _decoded(fh),
            comments=comments,
            progress=progress,
            progress_every=progress_every,
            total_bytes=total,
            cancel=cancel,
        )


def load_labels(store: GraphStore, path: Path, *, comments: bool = True) -> tuple[int, int]:
    """Apply ``id<delim>label`` lines from *path* to known nodes.

    Returns:
        ``(applied, skipped)`` where *skipped* counts ids not in the store.

    Raises:
        IngestError: A line has no integer id or is not valid UTF-8.
    """
    applied = 0
    skipped = 0
    with Path(path).open("rb") as fh:
        for number, line in _meaningful(_decoded(fh), comments=comments):
            fields = split_fields(line, maxsplit=1)
            if not fields or not _INTEGER.fullmatch(fields[0]):
                raise IngestError(number, "label line must start with an integer id")
            text = fields[1] if len(fields) > 1 else ""
            if store.set_label(int(fields[0]), text):
                applied += 1
            else:
                skipped += 1
    return applied, skipped


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def export_edges(store: GraphStore, path: Path) -> int:
    """Write every undirected edge once as ``id1<TAB>id2<TAB>weight``.

    Returns the number of edges written. Reloading the file reproduces the
    same node order and adjacency.
    """
    count = 0
    with Path(path).open("w", encoding="utf-8") as fh:
        for id_a, id_b, weight in store.edges():
            fh.write(f"{id_a}\t{id_b}\t{weight}\n")
            count += 1
    return count


def export_graphml(store: GraphStore, path: Path) -> int:
    """Write the graph as GraphML via NetworkX. Returns the edge count."""
    import networkx as nx

    g: nx.Graph[int] = store.to_networkx()
    nx.write_graphml(g, str(path))
    return g.number_of_edges()


# ---------------------------------------------------------------------------
# Background loading
# ---------------------------------------------------------------------------


class BackgroundLoader:
    """Run :func:`load_file` on a worker thread with cooperative cancel.

    Parameters:
        comments: Forwarded to :func:`load_file`.
        progress_every: Forwarded to :func:`load_file`.

    Usage::

        with BackgroundLoader() as loader:
            future = loader.submit(store, path, progress=bar.update)
            report = future.result()
    """

    def __init__(
        self,
        *,
        comments: bool = True,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
    ) -> None:
        self._comments = comments
        self._progress_every = progress_every
        self._executor: ThreadPoolExecutor | None = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pathctl-loader"
        )
        self._cancel = threading.Event()
        self._future: Future[LoadReport] | None = None

    def submit(
        self,
        store: GraphStore,
        path: Path,
        *,
        progress: ProgressCallback | None = None,
    ) -> Future[LoadReport]:
        """Start loading *path* into *store*, cancelling any earlier load."""
        if self._executor is None:
            msg = "BackgroundLoader has been shut down"
            raise RuntimeError(msg)
        self.cancel()
        self._cancel = threading.Event()
        self._future = self._executor.submit(
            load_file,
            store,
            path,
            comments=self._comments,
            progress=progress,
            progress_every=self._progress_every,
            cancel=self._cancel,
        )
        return self._future

    def cancel(self) -> None:
        """Ask the running load (if any) to stop and wait for it to finish."""
        self._cancel.set()
        if self._future is not None:
            # The outcome belongs to whoever holds the future.
            self._future.exception()
            self._future = None

    def shutdown(self) -> None:
        """Cancel any running load and stop the worker thread."""
        self.cancel()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> BackgroundLoader:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.shutdown()
