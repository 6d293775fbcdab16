"""ServiceResult and ServiceError — the envelope every service returns.

INVARIANT: Service methods never raise for expected failures (unknown
node, conflicting weight, bad input line); they return ``ok=False`` with a
ServiceError whose ``code`` comes from the engine's error vocabulary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pathctl.domain.errors import PathctlError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PathctlError) -> ServiceError:
        """Copy code, message, and detail from an engine exception."""
        return cls(code=exc.code, message=str(exc), detail=exc.detail())


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"path"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def failure(
    op: str,
    code: str,
    message: str,
    *,
    detail: dict[str, Any] | None = None,
    data: dict[str, Any] | None = None,
) -> ServiceResult:
    """Build an ``ok=False`` result."""
    return ServiceResult(
        ok=False,
        op=op,
        data=data or {},
        error=ServiceError(code=code, message=message, detail=detail or {}),
    )
