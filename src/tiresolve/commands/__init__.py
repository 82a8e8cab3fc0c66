"""Subcommand modules for tiresolve.

Provides register_commands() which uses deferred imports to keep
``tiresolve --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from tiresolve.commands.dirs import dirs
    from tiresolve.commands.env import env
    from tiresolve.commands.read import read
    from tiresolve.commands.resolve import resolve

    cli.add_command(resolve)
    cli.add_command(env)
    cli.add_command(dirs)
    cli.add_command(read)
