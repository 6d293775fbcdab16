"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from pathctl.output.console import create_console, distance_markup, get_output, node_markup

if TYPE_CHECKING:
    from rich.console import Console

    from pathctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "path":
        if not result.data.get("reachable"):
            return "UNREACHABLE"
        return " ".join(str(step["id"]) for step in result.data.get("steps", []))

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="pc.ok")
    op = Text(f"  {result.op}", style="pc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pc.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="pc.id")
    elif key == "path":
        v = Text(str(value), style="pc.path")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {escape(str(name))}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + escape(", ".join(f"{ak}={av}" for ak, av in annotations.items())) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pc.error")
    op = Text(f"  {result.op}", style="pc.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Path renderers ────────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a shortest path as a chain with its distance."""
    data = result.data
    source = data.get("source_id")
    target = data.get("target_id")

    if not data.get("reachable"):
        console.print(
            f"[pc.unreachable]No path[/pc.unreachable] between "
            f"[pc.id]{source}[/pc.id] and [pc.id]{target}[/pc.id]."
        )
    else:
        steps = data.get("steps", [])
        console.print(" → ".join(node_markup(s.get("id"), s.get("label")) for s in steps))
        console.print(
            f"\nDistance: [pc.distance]{data.get('distance')}[/pc.distance]"
            f"  Hops: {data.get('hops', 0)}"
        )

    ties = data.get("ties")
    if ties:
        console.print("\nEqual-cost parents:")
        for node_id, parents in ties.items():
            options = ", ".join(str(p) for p in parents)
            console.print(f"  [pc.id]{node_id}[/pc.id] ← {options}")

    trace = data.get("trace")
    if trace:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Step", justify="right", style="dim")
        table.add_column("Node", style="pc.id")
        table.add_column("Distance", style="pc.distance", justify="right")
        table.add_column("Final")
        for step_no, step in enumerate(trace, start=1):
            table.add_row(
                str(step_no),
                str(step.get("id")),
                str(step.get("distance")),
                "yes" if step.get("final") else "",
            )
        console.print()
        console.print(table)

    if verbose:
        _render_meta(console, result)


def _render_distances(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the single-source distance table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Node", style="pc.id", no_wrap=True)
    table.add_column("Label", style="pc.label")
    table.add_column("Distance", style="pc.distance", justify="right")
    table.add_column("Parents")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            Text(str(item.get("label", ""))),
            distance_markup(item.get("distance")),
            ", ".join(str(p) for p in item.get("parents", [])),
        )
    console.print(table)
    console.print(
        f"\nSource: [pc.id]{result.data.get('source_id')}[/pc.id]  "
        f"{result.data.get('reachable', 0)} of {result.data.get('count', len(items))} reachable"
    )
    if verbose:
        _render_meta(console, result)


# ── Inspection renderers ──────────────────────────────────────────────


def _render_node_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render neighbors and nodes listings."""
    items = result.data.get("items", [])
    extra = "weight" if result.op == "neighbors" else "degree"

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Node", style="pc.id", no_wrap=True)
    table.add_column("Label", style="pc.label")
    table.add_column(extra.title(), justify="right")
    if verbose and result.op == "nodes":
        table.add_column("Index", style="dim", justify="right")

    for item in items:
        row: list[str | Text] = [
            str(item.get("id", "")),
            Text(str(item.get("label", ""))),
            str(item.get(extra, "")),
        ]
        if verbose and result.op == "nodes":
            row.append(str(item.get("index", "")))
        table.add_row(*row)

    console.print(table)
    node_id = result.data.get("node_id")
    if node_id is not None:
        console.print(f"\nNode: [pc.id]{node_id}[/pc.id]")
    console.print(f"{result.data.get('count', len(items))} results")


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render graph statistics as aligned key-value lines."""
    _status_line(console, result)
    data = result.data
    rows = (
        ("nodes", data.get("node_count")),
        ("edges", data.get("edge_count")),
        ("total weight", data.get("total_weight")),
        ("avg degree", f"{float(data.get('avg_degree', 0.0)):.2f}"),
        ("min degree", data.get("min_degree")),
        ("max degree", data.get("max_degree")),
        ("density", f"{float(data.get('density', 0.0)):.4f}"),
    )
    for key, value in rows:
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Mutation renderers ────────────────────────────────────────────────


def _render_load(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render load summaries."""
    _status_line(console, result)
    for key in ("path", "node_count", "edges_added", "duplicates", "lines_read", "labels_applied"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "path": _render_path,
    "distances": _render_distances,
    "neighbors": _render_node_table,
    "nodes": _render_node_table,
    "stats": _render_stats,
    "load": _render_load,
    "export": _render_generic,
    "add_edge": _render_generic,
}
