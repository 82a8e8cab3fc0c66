"""Command: resolve the terminfo entry named by $TERM."""

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
  tiresolve env
  TERM=screen-256color tiresolve -q env
  tiresolve env -o current.ti""",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Copy the raw record bytes to this file.",
)
@click.pass_obj
def env(app: AppContext, output: Path | None) -> None:
    """Locate and load the terminfo entry for the current $TERM."""
    app.emit(app.service.resolve_env(output=output))
