"""Exception hierarchy raised by the graph store, path engine, and loader.

Every exception carries a stable ``code`` that the service layer copies
into ``ServiceError.code`` so CLI and JSON consumers see one vocabulary.
"""

from __future__ import annotations

from typing import Any


class PathctlError(Exception):
    """Base class for all recoverable pathctl errors."""

    code = "ERROR"

    def detail(self) -> dict[str, Any]:
        """Structured fields for ``ServiceError.detail``."""
        return {}


class ConflictError(PathctlError):
    """Two different weights were asserted for the same node pair."""

    code = "CONFLICT"

    def __init__(self, id_a: int, id_b: int, existing_weight: int, new_weight: int) -> None:
        self.id_a = id_a
        self.id_b = id_b
        # Set by the loader when the conflict came from an input line.
        self.line_number: int | None = None
        self.existing_weight = existing_weight
        self.new_weight = new_weight
        super().__init__(
            f"Conflicting weights between {id_a} and {id_b}: "
            f"{existing_weight} already recorded, got {new_weight}"
        )

    def detail(self) -> dict[str, Any]:
        return {
            "id_a": self.id_a,
            "id_b": self.id_b,
            "existing_weight": self.existing_weight,
            "new_weight": self.new_weight,
            "line": self.line_number,
        }


class UnknownNodeError(PathctlError):
    """A query referenced an identifier that was never added."""

    code = "NOT_FOUND"

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id} not found in graph")

    def detail(self) -> dict[str, Any]:
        return {"node_id": self.node_id}


class EmptyGraphError(PathctlError):
    """A computation was attempted on a graph with no nodes."""

    code = "EMPTY_GRAPH"

    def __init__(self) -> None:
        super().__init__("Graph has no nodes")


class IngestError(PathctlError):
    """An edge-list line could not be applied; ingestion stopped there."""

    code = "PARSE_ERROR"

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}")

    def detail(self) -> dict[str, Any]:
        return {"line": self.line_number, "reason": self.reason}


class IngestCancelled(PathctlError):
    """A background load was cancelled before reaching end of input."""

    code = "CANCELLED"

    def __init__(self, lines_read: int) -> None:
        self.lines_read = lines_read
        super().__init__(f"Load cancelled after {lines_read} lines")

    def detail(self) -> dict[str, Any]:
        return {"lines_read": self.lines_read}
