"""Command: resolve a terminfo entry by name."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from tiresolve.commands._base import TiCommand

if TYPE_CHECKING:
    from tiresolve.commands._context import AppContext


@click.command(
    cls=TiCommand,
    examples="""\
  tiresolve resolve xterm-256color
  tiresolve -q resolve screen
  tiresolve --json resolve tmux-256color
  tiresolve -v resolve xterm        # show every probed path
  tiresolve resolve xterm -o xterm.ti""",
)
@click.argument("name")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Copy the raw record bytes to this file.",
)
@click.pass_obj
def resolve(app: AppContext, name: str, output: Path | None) -> None:
    """Locate and load the terminfo entry NAME."""
    app.emit(app.service.resolve(name, output=output))
