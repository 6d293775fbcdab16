"""Commands: loading and exporting the graph."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pathctl.commands._base import PathCommand
from pathctl.services.ingest import EXPORT_FORMATS, IngestService
from pathctl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathctl.commands._context import AppContext


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt load
  pathctl -g roads.txt -l names.txt load
  pathctl -g big.tsv load --progress
  pathctl --json -g roads.txt load""",
)
@click.option("--progress", is_flag=True, help="Show a progress bar while loading.")
@click.pass_obj
def load(app: AppContext, progress: bool) -> None:
    """Load the graph file and report what was ingested."""
    from rich.console import Console
    from rich.progress import Progress

    if not progress or app.settings.quiet:
        result = app.load_graph()
    else:
        with Progress(console=Console(stderr=True), transient=True) as bar:
            task = bar.add_task("Loading", total=1.0)
            result = app.load_graph(
                background=True,
                progress=lambda fraction: bar.update(task, completed=fraction),
            )

    if result is None:
        result = ServiceResult(
            ok=True,
            op="load",
            data={"node_count": app.workspace.store.node_count()},
        )
    app.emit(result)


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt export clean.tsv
  pathctl -g roads.txt -e 1 99 4 export extended.tsv
  pathctl -g roads.txt -l names.txt export roads.graphml --format graphml""",
)
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(EXPORT_FORMATS),
    default="edgelist",
    help="Output format.",
)
@click.pass_obj
def export(app: AppContext, output: Path, fmt: str) -> None:
    """Write the loaded graph to OUTPUT."""
    app.load_graph()
    app.emit(IngestService(app.workspace).export(output, fmt=fmt))
