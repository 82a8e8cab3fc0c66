"""Rich Console factory and theme for tiresolve output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TI_THEME = Theme(
    {
        "ti.ok": "bold green",
        "ti.error": "bold red",
        "ti.warning": "bold yellow",
        "ti.op": "bold cyan",
        "ti.key": "dim",
        "ti.name": "bold blue",
        "ti.path": "dim",
        "ti.step.terminfo": "magenta",
        "ti.step.home": "green",
        "ti.step.terminfo_dirs": "yellow",
        "ti.step.fallback": "cyan",
        "ti.miss": "dim",
    }
)

_STEP_STYLES: dict[str, str] = {
    "TERMINFO": "ti.step.terminfo",
    "HOME": "ti.step.home",
    "TERMINFO_DIRS": "ti.step.terminfo_dirs",
    "fallback": "ti.step.fallback",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TI_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_step(step: str) -> str:
    """Return the Rich style name for a search step."""
    return _STEP_STYLES.get(step, "")
