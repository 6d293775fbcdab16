"""Commands: shortest paths and graph inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pathctl.commands._base import PathCommand
from pathctl.services.graph import GraphService

if TYPE_CHECKING:
    from pathctl.commands._context import AppContext


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt path 1 42
  pathctl -g roads.txt path 1 42 --ties
  pathctl -g roads.txt path 1 42 --trace
  pathctl -e 1 2 5 -e 2 3 1 path 1 3
  pathctl --json -g roads.txt path 1 42""",
)
@click.argument("source_id", type=int)
@click.argument("target_id", type=int)
@click.option("--trace", is_flag=True, help="Show every engine visitation step.")
@click.option("--ties", is_flag=True, help="Show equal-cost parents along the path.")
@click.pass_obj
def path(app: AppContext, source_id: int, target_id: int, trace: bool, ties: bool) -> None:
    """Find the shortest path between SOURCE_ID and TARGET_ID."""
    app.load_graph()
    app.emit(GraphService(app.workspace).path(source_id, target_id, trace=trace, ties=ties))


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt distances 1
  pathctl -q -g roads.txt distances 1""",
)
@click.argument("source_id", type=int)
@click.pass_obj
def distances(app: AppContext, source_id: int) -> None:
    """Shortest distance from SOURCE_ID to every node."""
    app.load_graph()
    app.emit(GraphService(app.workspace).distances(source_id))


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt neighbors 7
  pathctl --json -g roads.txt neighbors 7""",
)
@click.argument("node_id", type=int)
@click.pass_obj
def neighbors(app: AppContext, node_id: int) -> None:
    """List the direct neighbors of NODE_ID with edge weights."""
    app.load_graph()
    app.emit(GraphService(app.workspace).neighbors(node_id))


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt nodes
  pathctl -g roads.txt -l names.txt nodes
  pathctl -q -g roads.txt nodes""",
)
@click.pass_obj
def nodes(app: AppContext) -> None:
    """List every node in load order with its degree."""
    app.load_graph()
    app.emit(GraphService(app.workspace).nodes())


@click.command(
    cls=PathCommand,
    examples="""\
  pathctl -g roads.txt stats
  pathctl --json -g roads.txt stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show node, edge, degree, and weight statistics."""
    app.load_graph()
    app.emit(GraphService(app.workspace).stats())
