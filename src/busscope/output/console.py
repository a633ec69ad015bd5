"""Rich Console factory and theme for busscope output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BUS_THEME = Theme(
    {
        "bus.ok": "bold green",
        "bus.error": "bold red",
        "bus.warning": "bold yellow",
        "bus.op": "bold cyan",
        "bus.key": "dim",
        "bus.service": "bold blue",
        "bus.owner": "dim",
        "bus.path": "bold",
        "bus.interface": "cyan",
        "bus.member": "green",
        "bus.type": "magenta",
        "bus.muted": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (stable output in tests).
    """
    return Console(
        file=StringIO(),
        theme=BUS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
