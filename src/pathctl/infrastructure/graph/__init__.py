"""In-memory graph store, shortest-path engine, and statistics."""

from pathctl.infrastructure.graph.engine import CacheState, PathEngine, Uninitialized, ValidFor
from pathctl.infrastructure.graph.observer import (
    CallbackObserver,
    NullObserver,
    RecordingObserver,
    VisitObserver,
)
from pathctl.infrastructure.graph.stats import compute_stats
from pathctl.infrastructure.graph.store import GraphStore, NodeRecord

__all__ = [
    "CacheState",
    "CallbackObserver",
    "GraphStore",
    "NodeRecord",
    "NullObserver",
    "PathEngine",
    "RecordingObserver",
    "Uninitialized",
    "ValidFor",
    "VisitObserver",
    "compute_stats",
]
