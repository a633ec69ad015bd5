"""Command: show one object's interfaces and children."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from busscope.commands._base import BusCommand
from busscope.services.discovery import DiscoveryService

if TYPE_CHECKING:
    from busscope.commands._context import AppContext


@click.command(
    "object",
    cls=BusCommand,
    examples="""\
  busscope object org.freedesktop.systemd1 /org/freedesktop/systemd1
  busscope --json object com.example.Foo /com/example/Foo""",
)
@click.argument("name")
@click.argument("path", default="/")
@click.pass_obj
def object_cmd(app: AppContext, name: str, path: str) -> None:
    """Show interfaces, members, and child objects of PATH on service NAME."""
    app.emit(DiscoveryService(app.bus, app.settings).inspect_object(name, path))
