"""Root CLI group for busscope with global flags and command registration."""

from __future__ import annotations

import click

from busscope import __version__
from busscope.commands import register_commands
from busscope.commands._base import BusGroup
from busscope.commands._context import AppContext
from busscope.config.settings import BusSettings


@click.group(
    cls=BusGroup,
    invoke_without_command=True,
    examples="""\
  busscope names
  busscope service org.freedesktop.login1
  busscope object org.freedesktop.login1 /org/freedesktop/login1
  busscope discover --filter example""",
)
@click.version_option(version=__version__, prog_name="busscope")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Names and paths only.")
@click.option("-v", "--verbose", is_flag=True, help="Member details, debug logs, timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--bus",
    "bus_kind",
    type=click.Choice(["system", "session"]),
    default=None,
    help="Which bus to explore (default: system).",
)
@click.option("--address", default=None, help="Explicit D-Bus address, overrides --bus.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    bus_kind: str | None,
    address: str | None,
) -> None:
    """busscope: explore services and objects on a D-Bus message bus."""
    settings = BusSettings.from_cli(
        config_path=config_path,
        bus_kind=bus_kind,
        address=address,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
