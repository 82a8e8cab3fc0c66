"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from tiresolve.output.console import create_console, get_output, style_for_step

if TYPE_CHECKING:
    from rich.console import Console

    from tiresolve.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode.

    Record lookups print only the resolved path; search order prints
    one directory per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("directory", "")) for item in items)

    path = result.data.get("path")
    if path is not None:
        return str(path)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="ti.ok")
    op = Text(f"  {result.op}", style="ti.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ti.key")
    if key == "name":
        v = Text(str(value), style="ti.name")
    elif key in ("path", "output"):
        v = Text(str(value), style="ti.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


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
            console.print(f"    {k}: {v}")


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

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"

    extras = [f"{ak}={av}" for ak, av in span_data.get("annotations", {}).items()]
    if extras:
        line += f"  ({', '.join(extras)})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _attempt_table(attempts: list[dict[str, Any]]) -> Table:
    """Build a table of probed candidate paths."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Layout")
    table.add_column("Path", style="ti.path")
    table.add_column("Result")
    for attempt in attempts:
        error = attempt.get("error")
        result = Text(error, style="ti.miss") if error else Text("loaded", style="ti.ok")
        table.add_row(str(attempt.get("layout", "")), str(attempt.get("path", "")), result)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ti.error")
    op = Text(f"  {result.op}", style="ti.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k == "attempts":
                console.print(_attempt_table(v))
            else:
                console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a loaded record: where it came from and how big it is."""
    _status_line(console, result)
    data = result.data
    for key in ("name", "path", "layout", "size", "output"):
        if data.get(key) is not None:
            _field(console, key, data[key])
    if data.get("truncated"):
        console.print(Text("  truncated at capacity", style="ti.warning"))

    attempts = data.get("attempts") or []
    if verbose and attempts:
        console.print()
        console.print(Text(f"  attempts ({len(attempts)}):", style="dim"))
        console.print(_attempt_table(attempts))
    if verbose:
        _render_meta(console, result)


def _render_search_order(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render the effective search order as a numbered table."""
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    with_candidates = any("candidates" in item for item in items)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Source")
    table.add_column("Directory", style="ti.path")
    if with_candidates:
        table.add_column("Candidates", style="ti.path")

    for idx, item in enumerate(items, start=1):
        step = str(item.get("step", ""))
        row = [str(idx), Text(step, style=style_for_step(step)), str(item.get("directory", ""))]
        if with_candidates:
            row.append("\n".join(item.get("candidates", [])))
        table.add_row(*row)

    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "resolve": _render_record,
    "resolve_env": _render_record,
    "load_file": _render_record,
    "load_stream": _render_record,
    "search_order": _render_search_order,
}
