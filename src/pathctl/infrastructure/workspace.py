"""Workspace — the single dependency injected into every service.

Owns one :class:`GraphStore` and the :class:`PathEngine` bound to it, plus
the settings that say where the graph comes from. The engine subscribes to
the store, so every mutation made through the workspace invalidates the
memoized path computation.

Nothing is persisted: a workspace starts empty and is filled from an
edge-list file, pasted text, or individual edges.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pathctl.infrastructure.graph.engine import PathEngine
from pathctl.infrastructure.graph.store import GraphStore

if TYPE_CHECKING:
    from pathlib import Path

    from pathctl.config.settings import PathSettings

logger = logging.getLogger(__name__)


class Workspace:
    """In-memory graph plus engine, configured by :class:`PathSettings`."""

    def __init__(self, settings: PathSettings | None = None) -> None:
        if settings is None:
            from pathctl.config.settings import PathSettings

            settings = PathSettings()
        self.settings = settings
        self.store = GraphStore()
        self.engine = PathEngine(self.store)
        self.source: Path | None = None

    def reset(self) -> None:
        """Empty the graph and forget where it was loaded from."""
        self.store.clear()
        self.source = None
        logger.debug("Workspace reset")
