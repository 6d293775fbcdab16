"""Subcommand modules for pathctl.

Provides register_commands() which uses deferred imports to keep
``pathctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from pathctl.commands.ingest import export, load
    from pathctl.commands.query import distances, neighbors, nodes, path, stats

    cli.add_command(load)
    cli.add_command(export)

    cli.add_command(path)
    cli.add_command(distances)
    cli.add_command(neighbors)
    cli.add_command(nodes)
    cli.add_command(stats)
