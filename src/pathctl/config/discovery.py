"""Locating and reading ``pathctl.toml``.

The nearest ``pathctl.toml`` at or above the working directory wins, the
way git finds ``.git/``. ``PATHCTL_CONFIG`` names a file directly and
turns the walk off; ``--config`` bypasses both (see ``PathSettings.from_cli``).
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "pathctl.toml"
CONFIG_ENV_VAR = "PATHCTL_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    """*start* and each parent directory up to the filesystem root."""
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A set ``PATHCTL_CONFIG`` is authoritative: if it points at a missing
    file, no config is used rather than falling back to the walk.
    """
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        named = Path(env_path)
        return named if named.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
