"""Rich Console factory and theme for pathctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

PATHCTL_THEME = Theme(
    {
        "pc.ok": "bold green",
        "pc.error": "bold red",
        "pc.warning": "bold yellow",
        "pc.op": "bold cyan",
        "pc.key": "dim",
        "pc.id": "bold blue",
        "pc.label": "bold",
        "pc.path": "dim",
        "pc.distance": "magenta",
        "pc.unreachable": "dim red",
        "pc.final": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PATHCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def node_markup(node_id: object, label: object) -> str:
    """Markup for a node: the id, plus its label when it differs from the id."""
    text = f"[pc.id]{node_id}[/pc.id]"
    if label and str(label) != str(node_id):
        text += f" ([pc.label]{escape(str(label))}[/pc.label])"
    return text


def distance_markup(distance: int | None) -> str:
    """Markup for a shortest distance; None reads ``unreachable``."""
    if distance is None:
        return "[pc.unreachable]unreachable[/pc.unreachable]"
    return f"[pc.distance]{distance}[/pc.distance]"
