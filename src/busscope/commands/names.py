"""Command: list public bus names."""

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
  busscope names
  busscope --bus session names
  busscope -q names | grep -i network""",
)
@click.pass_obj
def names(app: AppContext) -> None:
    """List well-known service names on the bus."""
    app.emit(DiscoveryService(app.bus, app.settings).list_names())
