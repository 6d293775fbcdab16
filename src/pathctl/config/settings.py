"""PathSettings: CLI flags, environment, and ``pathctl.toml`` merged into one object.

Sources, highest priority first:

1. keyword arguments (the CLI flags Click collected)
2. ``PATHCTL_*`` environment variables, ``__`` for nesting
   (``PATHCTL_INGEST__PROGRESS_EVERY=500``)
3. the TOML file from ``--config``, ``PATHCTL_CONFIG``, or walk-up discovery
4. defaults on the section models in :mod:`pathctl.config.models`

``[graph]`` paths in the TOML file are relative to the file, so a project
can keep ``pathctl.toml`` next to its data and run from any subdirectory.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pathctl.config.discovery import find_config
from pathctl.config.models import GraphConfig, IngestConfig, OutputConfig

_GRAPH_PATH_KEYS = ("file", "labels_file")

# TOML file chosen by from_cli(), read back by settings_customise_sources().
_toml_path: ContextVar[Path | None] = ContextVar("_toml_path", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, rebasing relative ``[graph]`` paths onto its directory.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc

    graph = data.get("graph")
    if isinstance(graph, dict):
        for key in _GRAPH_PATH_KEYS:
            value = graph.get(key)
            if isinstance(value, str) and value and not Path(value).is_absolute():
                graph[key] = str(path.parent / value)
    return data


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``pathctl.toml`` (or nothing)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class PathSettings(BaseSettings):
    """Everything a pathctl invocation is configured with.

    Frozen. Built once per invocation by the root command and carried on
    ``AppContext.settings``.

    Attributes:
        config_path: The TOML file that was read, if any.
        graph_file: ``--graph``; takes precedence over ``[graph] file``.
        labels_file: ``--labels``; takes precedence over ``[graph] labels_file``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PATHCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    graph_file: Path | None = None
    labels_file: Path | None = None

    graph: GraphConfig = Field(default_factory=GraphConfig)
    ingest: IngestConfig = Field(default_factory=IngestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> PathSettings:
        """Build settings for one invocation.

        *config_path* (``--config``) must name an existing file; otherwise
        the config is discovered from *start_dir*. Flags whose value is
        None were not given on the command line and do not override.

        Raises:
            click.ClickException: ``--config`` names a missing file, or the
                TOML is invalid.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(start_dir)

        given = {name: value for name, value in cli_flags.items() if value is not None}
        token = _toml_path.set(toml_path)
        try:
            return cls(config_path=toml_path, **given)
        finally:
            _toml_path.reset(token)

    @property
    def effective_graph_file(self) -> Path | None:
        """``--graph`` if given, else ``[graph] file``."""
        return self.graph_file or self.graph.file

    @property
    def effective_labels_file(self) -> Path | None:
        return self.labels_file or self.graph.labels_file
