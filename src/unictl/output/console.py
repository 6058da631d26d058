"""Rich theme and buffer-backed consoles for result rendering.

Renderers draw into an in-memory console and hand back a string; the
command layer decides whether it goes to stdout or stderr. Rich drops
ANSI styling on its own when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

UNI_THEME = Theme(
    {
        "uni.ok": "bold green",
        "uni.error": "bold red",
        "uni.warning": "bold yellow",
        "uni.op": "bold cyan",
        "uni.key": "dim",
        "uni.identity": "bold blue",
        "uni.amount": "magenta",
        "uni.flag.on": "green",
        "uni.flag.off": "red",
    }
)


def create_console(*, width: int = DEFAULT_WIDTH, no_color: bool = False) -> Console:
    return Console(
        file=StringIO(),
        width=width,
        theme=UNI_THEME,
        highlight=False,
        no_color=no_color,
    )


def get_output(console: Console) -> str:
    """Everything drawn so far on a console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console was not created by create_console()"
        raise TypeError(msg)
    return buffer.getvalue()
