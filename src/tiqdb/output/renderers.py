"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.text import Text

from tiqdb.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from tiqdb.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose and result.meta:
            _render_meta(result, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: one tag per line for list results, else a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    tags = result.data.get("tags")
    if isinstance(tags, list):
        return "\n".join(tags)
    return f"OK: {result.op}"


def _header(result: ServiceResult, console: Console) -> None:
    line = Text()
    line.append("OK", style="tiq.ok")
    line.append(": ")
    line.append(result.op, style="tiq.op")
    namespace = result.data.get("namespace")
    if namespace:
        line.append(f" [{namespace}]", style="tiq.namespace")
    console.print(line)


def _render_tags(result: ServiceResult, console: Console) -> None:
    _header(result, console)
    tags = result.data.get("tags", [])
    if not tags:
        console.print("  (no matching tags)", style="tiq.key")
        return
    for tag in tags:
        console.print(Text(f"  {tag}", style="tiq.tag"))


def _render_associate(result: ServiceResult, console: Console) -> None:
    _header(result, console)
    for key in ("labels_created", "edges_created", "labels_updated"):
        line = Text()
        line.append(f"  {key}: ", style="tiq.key")
        line.append(str(result.data.get(key, 0)))
        console.print(line)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _header(result, console)
    for key, value in result.data.items():
        if key == "namespace":
            continue
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        line = Text()
        line.append(f"  {key}: ", style="tiq.key")
        line.append(str(value))
        console.print(line)


def _render_meta(result: ServiceResult, console: Console) -> None:
    assert result.meta is not None
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print(Text(f"  telemetry: {json.dumps(telemetry)}", style="tiq.key"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    line = Text()
    line.append("ERROR", style="tiq.error")
    line.append(": ")
    line.append(result.op, style="tiq.op")
    if result.error:
        line.append(f" ({result.error.code}) {result.error.message}")
    console.print(line)
    if verbose and result.error and result.error.detail:
        console.print(Text(f"  detail: {json.dumps(result.error.detail)}", style="tiq.key"))


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "associate": _render_associate,
    "describe": _render_tags,
    "search": _render_tags,
}
