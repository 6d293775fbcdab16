"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from pathctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pathctl = logging.getLogger("pathctl")
    pathctl_level = pathctl.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pathctl.setLevel(pathctl_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("pathctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("pathctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("pathctl.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "pathctl.test"
        assert "timestamp" in parsed

    def test_engine_debug_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        from pathctl.infrastructure.graph.engine import PathEngine
        from pathctl.infrastructure.graph.store import GraphStore

        configure_logging(verbose=True, log_json=True)
        store = GraphStore()
        store.add_edge(1, 2, 3)
        capfd.readouterr()
        PathEngine(store).calculate(1)

        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]
        events = [line for line in lines if line["logger"] == "pathctl.infrastructure.graph.engine"]
        assert events
        assert events[0]["level"] == "debug"
        assert "Shortest paths computed from 1" in events[0]["event"]

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("pathctl.infrastructure.loader").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_quiet_raises_threshold(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("pathctl").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("pathctl").level == logging.DEBUG
