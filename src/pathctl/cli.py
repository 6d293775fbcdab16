"""Root CLI group for pathctl with global flags and command registration."""

from __future__ import annotations

import click
from click.core import ParameterSource

from pathctl import __version__
from pathctl.commands import register_commands
from pathctl.commands._base import PathGroup
from pathctl.commands._context import AppContext
from pathctl.config.settings import PathSettings


@click.group(
    cls=PathGroup,
    invoke_without_command=True,
    examples="""\
  pathctl -g roads.txt path 1 42
  pathctl -g roads.txt -l names.txt distances 1
  pathctl -e 1 2 5 -e 2 3 1 path 1 3
  pathctl --json -g roads.txt stats""",
)
@click.version_option(version=__version__, prog_name="pathctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-g",
    "--graph",
    "graph_file",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Edge-list file to load.",
)
@click.option(
    "-l",
    "--labels",
    "labels_file",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Label file (id, label per line) applied after loading.",
)
@click.option(
    "-e",
    "--edge",
    "edges",
    type=int,
    nargs=3,
    multiple=True,
    metavar="A B W",
    help="Add an edge after loading (repeatable).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    graph_file: str | None,
    labels_file: str | None,
    edges: tuple[tuple[int, int, int], ...],
) -> None:
    """pathctl — shortest paths over weighted undirected graphs."""
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    # unset flags leave PATHCTL_* and the TOML file in charge
    given = {
        name: value
        for name, value in flags.items()
        if ctx.get_parameter_source(name) is not ParameterSource.DEFAULT
    }
    settings = PathSettings.from_cli(
        config_path=config_path,
        **given,
        graph_file=graph_file,
        labels_file=labels_file,
    )
    ctx.obj = AppContext(settings, edges=tuple(edges))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
