"""Command: show the effective terminfo search order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tiresolve.commands._base import TiCommand

if TYPE_CHECKING:
    from tiresolve.commands._context import AppContext


@click.command(
    cls=TiCommand,
    examples="""\
  tiresolve dirs
  tiresolve dirs xterm              # include candidate paths
  TERMINFO_DIRS=:~/ti tiresolve -q dirs""",
)
@click.argument("name", required=False)
@click.pass_obj
def dirs(app: AppContext, name: str | None) -> None:
    """List the directories searched, in precedence order."""
    app.emit(app.service.search_order(name))
