"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints copy-pasteable invocations
and exits without loading a graph. The flag is eager, so it wins over
missing required arguments (``pathctl path --examples`` works).
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Shared ``examples=`` keyword handling for commands and groups."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)


class PathCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples=``; used via ``cls=PathCommand``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class PathGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands default to PathCommand."""

    command_class = PathCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
