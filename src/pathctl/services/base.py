"""BaseService — shared foundation for pathctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the graph store, the path engine, and the settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathctl.infrastructure.workspace import Workspace


class BaseService:
    """Base for service-layer classes.

    Subclasses implement operations over the workspace graph and return
    :class:`~pathctl.services.result.ServiceResult`.

    Usage::

        class GraphService(BaseService):
            def stats(self) -> ServiceResult:
                stats = compute_stats(self._workspace.store)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _node_entry(self, node_id: int, **extra: Any) -> dict[str, Any]:
        """Describe one node as ``{"id", "label", **extra}``."""
        return {"id": node_id, "label": self._workspace.store.label(node_id), **extra}
