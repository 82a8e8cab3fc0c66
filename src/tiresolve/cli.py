"""Root CLI group for tiresolve with global flags and command registration."""

from __future__ import annotations

import click

from tiresolve import __version__
from tiresolve.commands import register_commands
from tiresolve.commands._base import TiGroup
from tiresolve.commands._context import AppContext
from tiresolve.config.settings import TiSettings


@click.group(
    cls=TiGroup,
    invoke_without_command=True,
    examples="""\
  tiresolve resolve xterm-256color
  tiresolve env
  tiresolve dirs xterm
  tiresolve -c ./tiresolve.toml --json resolve screen""",
)
@click.version_option(version=__version__, prog_name="tiresolve")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """tiresolve — locate and load compiled terminfo entries."""
    ctx.ensure_object(dict)
    settings = TiSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
