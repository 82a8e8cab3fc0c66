"""Command: read a compiled terminfo record from a file or stdin."""

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
  tiresolve read /usr/share/terminfo/x/xterm
  cat /usr/share/terminfo/x/xterm | tiresolve read -
  tiresolve --json read ./build/78/xterm""",
)
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True, path_type=Path))
@click.pass_obj
def read(app: AppContext, source: Path) -> None:
    """Read the record at SOURCE (``-`` for stdin), bypassing the search."""
    if str(source) == "-":
        stream = click.get_binary_stream("stdin")
        app.emit(app.service.load_stream(stream))
    else:
        app.emit(app.service.load_file(source))
