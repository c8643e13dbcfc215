"""Rich Console factory and theme for tiq output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests, pipes)
Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TIQ_THEME = Theme(
    {
        "tiq.ok": "bold green",
        "tiq.error": "bold red",
        "tiq.warning": "bold yellow",
        "tiq.op": "bold cyan",
        "tiq.key": "dim",
        "tiq.tag": "bold",
        "tiq.namespace": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TIQ_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
