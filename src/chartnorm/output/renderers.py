"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` (and, for ``normalize``, by the
chart kind in the payload). Unknown ops fall through to a key-value dump.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from chartnorm.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from chartnorm.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _renderer_for(result)(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Bare numbers, one record per line, for piping."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if "positions" in d:
        return "\n".join(f"{_num(p['x'])},{_num(p['y'])}" for p in d["positions"])
    if "bars" in d:
        return "\n".join(f"{b['index']},{_num(b['top'])},{_num(b['bottom'])}" for b in d["bars"])
    if "groups" in d:
        return "\n".join(f"{_num(g['key'])},{_num(g['sum'])}" for g in d["groups"])
    if "x" in d and "y" in d:
        return " ".join(_num(v) for v in (d["x"]["min"], d["x"]["max"], d["y"]["min"], d["y"]["max"]))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _num(value: Any) -> str:
    if isinstance(value, float):
        if abs(value) >= 1e6:
            return f"{value:.4g}"
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return "0" if text in ("", "-", "-0") else text
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cn.ok"), Text(f"  {result.op}", style="cn.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="cn.key"), Text(str(value)), sep="")


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text("  warning: ", style="cn.warning"), Text(warning), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _header(console: Console, result: ServiceResult) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "kind", d.get("kind", ""))
    _field(console, "size", f"{_num(d.get('width', 0))} x {_num(d.get('height', 0))}")
    _field(console, "baseline", _num(d.get("baseline", 0.0)))
    axes = d.get("axes")
    if axes:
        _field(console, "axes", f"x-axis y={_num(axes['x_axis_y'])}, y-axis x={_num(axes['y_axis_x'])}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_positions(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    table = Table(show_header=True, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("x", style="cn.coord", justify="right")
    table.add_column("y", style="cn.coord", justify="right")
    for i, pos in enumerate(result.data["positions"]):
        table.add_row(str(i), _num(pos["x"]), _num(pos["y"]))
    console.print(table)
    _render_warnings(console, result)


def _render_bars(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    d = result.data
    _field(console, "scale", f"+{_num(d['positive_scale'])} / -{_num(d['negative_scale'])} px per unit")
    table = Table(show_header=True, pad_edge=False)
    for name in ("#", "value", "x", "length", "dir", "top", "bottom"):
        table.add_column(name, justify="right")
    for bar in d["bars"]:
        direction = str(bar["direction"])
        table.add_row(
            str(bar["index"]),
            _num(bar["value"]),
            _num(bar["x"]),
            _num(bar["length"]),
            Text(direction, style="cn.up" if direction == "up" else "cn.down"),
            _num(bar["top"]),
            _num(bar["bottom"]),
        )
    console.print(table)
    _render_warnings(console, result)


def _render_groups(result: ServiceResult, console: Console) -> None:
    _header(console, result)
    table = Table(show_header=True, pad_edge=False)
    for name in ("key", "sum", "width", "offset", "segments"):
        table.add_column(name, justify="right")
    for group in result.data["groups"]:
        table.add_row(
            _num(group["key"]),
            _num(group["sum"]),
            _num(group["width"]),
            _num(group["offset"]),
            str(len(group["segments"])),
        )
    console.print(table)
    _render_warnings(console, result)


def _render_extent(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "count", d["count"])
    _field(console, "x", f"[{_num(d['x']['min'])}, {_num(d['x']['max'])}]")
    _field(console, "y", f"[{_num(d['y']['min'])}, {_num(d['y']['max'])}]")
    _render_warnings(console, result)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings(console, result)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="cn.error"), Text(f"  {result.op}", style="cn.op"), Text(f": {msg}"), sep="")
    if err is not None:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if verbose:
            for key, value in err.detail.items():
                console.print(f"    {key}: {value}")


def _renderer_for(result: ServiceResult) -> Renderer:
    d = result.data
    if result.op in ("normalize", "stack"):
        if "positions" in d:
            return _render_positions
        if "bars" in d:
            return _render_bars
        if "groups" in d:
            return _render_groups
    return _OP_RENDERERS.get(result.op, _render_generic)


_OP_RENDERERS: dict[str, Renderer] = {
    "extent": _render_extent,
}
