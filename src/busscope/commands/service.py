"""Command: discover one service's object graph."""

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
  busscope service org.freedesktop.systemd1
  busscope -v service org.freedesktop.NetworkManager
  busscope --json service com.example.Foo""",
)
@click.argument("name")
@click.pass_obj
def service(app: AppContext, name: str) -> None:
    """Walk every object of service NAME."""
    app.emit(DiscoveryService(app.bus, app.settings).discover_service(name))
