"""Shared pytest fixtures and test helpers for pathctl tests."""

from __future__ import annotations

import os
from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from pathctl.config.settings import PathSettings
from pathctl.infrastructure.graph.engine import PathEngine
from pathctl.infrastructure.graph.store import GraphStore
from pathctl.infrastructure.workspace import Workspace
from pathctl.services.telemetry import _current_span, disable_telemetry

# Triangle where the direct 1-3 edge (5) beats the detour through 2 (6).
TRIANGLE = [(1, 2, 5), (1, 3, 5), (2, 3, 1)]

# Square where node 4 is reachable at equal cost through 2 and through 3.
SQUARE = [(1, 2, 1), (1, 3, 1), (2, 4, 1), (3, 4, 1)]


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PATHCTL_* environment out of every test."""
    for key in list(os.environ):
        if key.startswith("PATHCTL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """`-v` enables telemetry for the current context; switch it back off."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def engine(store: GraphStore) -> PathEngine:
    return PathEngine(store)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Empty workspace whose settings ignore any pathctl.toml outside tmp_path."""
    monkeypatch.chdir(tmp_path)
    return Workspace(PathSettings.from_cli(start_dir=tmp_path))


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so the CLI never discovers a stray config.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def add_edges(store: GraphStore, edges: Iterable[tuple[int, int, int]]) -> GraphStore:
    """Add every ``(a, b, w)`` edge to *store* and return it."""
    for a, b, w in edges:
        store.add_edge(a, b, w)
    return store


def write_edges(path: Path, edges: Iterable[tuple[int, int, int]], *, sep: str = " ") -> Path:
    """Write an edge-list file with one ``a<sep>b<sep>w`` line per edge."""
    path.write_text("".join(f"{a}{sep}{b}{sep}{w}\n" for a, b, w in edges), encoding="utf-8")
    return path
