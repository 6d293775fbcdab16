"""Fixtures for CLI command tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Every invocation reconfigures logging against CliRunner's streams; undo it."""
    root = logging.getLogger()
    package = logging.getLogger("pathctl")
    handlers = root.handlers[:]
    root_level, package_level = root.level, package.level
    yield
    root.handlers = handlers
    root.setLevel(root_level)
    package.setLevel(package_level)
