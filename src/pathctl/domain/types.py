"""Result codes, path results, and graph statistics.

These are the values the engine hands back to callers. The sentinel
distance ``UNREACHABLE`` is what an unreached node carries and what an
unreachable query reports. The engine decides reachability from recorded
parents, never by comparing against the sentinel, so real distances past
it are still correct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

UNREACHABLE: Final = 999_999_999

INT64_MIN: Final = -(2**63)
INT64_MAX: Final = 2**63 - 1


class ResultCode(StrEnum):
    """Outcome of a distance query."""

    FOUND = "found"
    FOUND_TRIVIAL = "found_trivial"
    UNREACHABLE = "unreachable"
    NODE_NOT_FOUND = "node_not_found"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class PathResult:
    """Answer to ``get_distance(source, target)``.

    ``path`` runs from source to target inclusive and is empty unless
    ``code`` is FOUND or FOUND_TRIVIAL.
    """

    code: ResultCode
    distance: int = UNREACHABLE
    path: tuple[int, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.code in (ResultCode.FOUND, ResultCode.FOUND_TRIVIAL)


@dataclass(frozen=True)
class GraphStats:
    """Aggregate metrics derived from the undirected adjacency."""

    node_count: int = 0
    edge_count: int = 0
    avg_degree: float = 0.0
    max_degree: int = 0
    min_degree: int = 0
    total_weight: int = 0

    @property
    def density(self) -> float:
        """Share of possible undirected edges present (0.0 below two nodes)."""
        n = self.node_count
        if n < 2:
            return 0.0
        return self.edge_count / (n * (n - 1) / 2)

    def to_dict(self) -> dict[str, int | float]:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "avg_degree": self.avg_degree,
            "max_degree": self.max_degree,
            "min_degree": self.min_degree,
            "total_weight": self.total_weight,
            "density": round(self.density, 6),
        }


def check_int64(value: int, what: str) -> int:
    """Return *value* unchanged or raise ValueError if it overflows int64."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{what} must be an integer, got {value!r}"
        raise ValueError(msg)
    if not INT64_MIN <= value <= INT64_MAX:
        msg = f"{what} {value} does not fit in a signed 64-bit integer"
        raise ValueError(msg)
    return value
