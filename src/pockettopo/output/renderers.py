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

from pockettopo.output.console import create_console, get_output, style_for_color

if TYPE_CHECKING:
    from rich.console import Console

    from pockettopo.services.result import ServiceResult


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
    """Render minimal, tab-separated output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "inspect":
        return "\n".join(
            f"{s['from']}\t{s['to']}\t{s['distance_m']:.3f}\t"
            f"{s['azimuth_deg']:.2f}\t{s['inclination_deg']:.2f}"
            for s in result.data.get("shots", [])
        )
    if result.op == "check":
        return "\n".join(
            f"{i['severity']}\t{i['category']}\t{i['message']}"
            for i in result.data.get("issues", [])
        )
    if result.op == "export" and "output" in result.data:
        return str(result.data["output"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="topo.ok")
    op = Text(f"  {result.op}", style="topo.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="topo.key")
    if key in ("path", "output"):
        v = Text(str(value), style="topo.path")
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        v = Text(str(value), style="topo.number")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _format_mapping(mapping: dict[str, Any]) -> str:
    return f"origin=({mapping['x']}, {mapping['y']}) scale=1:{mapping['scale']}"


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
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="topo.error")
    op = Text(f"  {result.op}", style="topo.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.location:
        console.print(Text(f"  at {err.location}", style="topo.path"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Inspect ───────────────────────────────────────────────────────────


def _trip_table(trips: list[dict[str, Any]]) -> Table:
    table = Table(title="Trips", show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Declination", justify="right", style="topo.number")
    table.add_column("Comment")
    for trip in trips:
        table.add_row(
            str(trip["index"]),
            str(trip["date"]),
            f"{trip['declination_deg']:.2f}°",
            Text(str(trip["comment"])),
        )
    return table


def _color_line(console: Console, colors: dict[str, int]) -> None:
    """Print polygon counts per stroke color, each in its own color."""
    parts: list[Text | str] = [Text("    colors:", style="topo.key")]
    for name, count in colors.items():
        parts.append(Text(f"{name}={count}", style=style_for_color(name)))
    console.print(*parts)


def _shot_table(shots: list[dict[str, Any]], *, verbose: bool) -> Table:
    table = Table(title="Shots", show_header=True, pad_edge=False, expand=False)
    table.add_column("From", style="topo.station", no_wrap=True)
    table.add_column("To", style="topo.station", no_wrap=True)
    table.add_column("Dist (m)", justify="right", style="topo.number")
    table.add_column("Azi", justify="right")
    table.add_column("Inc", justify="right")
    table.add_column("Trip", justify="right")
    if verbose:
        table.add_column("Comment")
    for shot in shots:
        row: list[str | Text] = [
            str(shot["from"]) + (" (flipped)" if shot.get("flipped") else ""),
            str(shot["to"]),
            f"{shot['distance_m']:.3f}",
            f"{shot['azimuth_deg']:.2f}",
            f"{shot['inclination_deg']:.2f}",
            "-" if shot["trip"] < 0 else str(shot["trip"]),
        ]
        if verbose:
            row.append(Text(str(shot.get("comment") or "").strip()))
        table.add_row(*row)
    return table


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a decoded file summary with trip and shot tables."""
    d = result.data
    _status_line(console, result)
    for key in ("path", "version"):
        _field(console, key, d[key])
    _field(console, "trips", d["trip_count"])
    _field(console, "shots", d["shot_count"])
    _field(console, "references", d["reference_count"])
    _field(console, "stations", d["station_count"])
    _field(console, "length", f"{d['total_length_m']:.2f} m")
    _field(console, "overview", _format_mapping(d["mapping"]))
    for name in ("outline", "sideview"):
        summary = d[name]
        _field(
            console,
            name,
            f"{summary['elements']} elements "
            f"({summary['polygons']} polygons, {summary['cross_sections']} cross-sections) "
            f"{_format_mapping(summary['mapping'])}",
        )
        if verbose and summary.get("colors"):
            _color_line(console, summary["colors"])

    if d.get("trips"):
        console.print()
        console.print(_trip_table(d["trips"]))
    if d.get("shots"):
        console.print()
        console.print(_shot_table(d["shots"], verbose=verbose))
    if verbose:
        _render_meta(console, result)


# ── Check ─────────────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[topo.ok]OK[/topo.ok]  No issues found.")
        if verbose:
            _render_meta(console, result)
        return

    severity_styles = {"error": "topo.error", "warning": "topo.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        cat = str(issue.get("category", "unknown"))
        by_category.setdefault(cat, []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            console.print(f"  {prefix}: {issue.get('message', '')}")

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")
    if verbose:
        _render_meta(console, result)


# ── Export ────────────────────────────────────────────────────────────


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("path", "output", "shots"):
        if key in result.data:
            _field(console, key, result.data[key])
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
    "inspect": _render_inspect,
    "check": _render_check,
    "export": _render_export,
}
