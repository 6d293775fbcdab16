"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pathctl.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- pathctl.toml sections ---


class GraphConfig(BaseModel):
    """[graph] section: default inputs when ``--graph``/``--labels`` are omitted."""

    model_config = {"frozen": True}

    file: Path | None = None
    labels_file: Path | None = None


class IngestConfig(BaseModel):
    """[ingest] section."""

    model_config = {"frozen": True}

    comments: bool = True
    progress_every: int = Field(default=1000, ge=1)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    trace_limit: int = Field(default=200, ge=0)
