"""Rich Console factory and theme for chartnorm output.

Consoles render into a StringIO buffer so renderers keep a
``-> str`` contract; Rich drops color codes when not on a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHARTNORM_THEME = Theme(
    {
        "cn.ok": "bold green",
        "cn.error": "bold red",
        "cn.warning": "bold yellow",
        "cn.op": "bold cyan",
        "cn.key": "dim",
        "cn.coord": "magenta",
        "cn.up": "green",
        "cn.down": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a StringIO-backed Console.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width for stable output.
    """
    return Console(
        file=StringIO(),
        theme=CHARTNORM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
