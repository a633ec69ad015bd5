"""Command: discover every service on the bus."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from busscope.commands._base import BusCommand
from busscope.services.discovery import DiscoveryService

if TYPE_CHECKING:
    from busscope.commands._context import AppContext


@click.command(
    cls=BusCommand,
    examples="""\
  busscope discover
  busscope discover --filter example
  busscope -v discover --filter org.freedesktop.login1
  busscope --json discover > bus.json""",
)
@click.option(
    "-f",
    "--filter",
    "name_filter",
    default=None,
    help="Only walk services whose name contains this text (case-sensitive).",
)
@click.pass_obj
def discover(app: AppContext, name_filter: str | None) -> None:
    """Walk all services and their objects."""
    app.emit(DiscoveryService(app.bus, app.settings).discover_all(name_filter))
