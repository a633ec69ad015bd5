"""Subcommand modules for busscope.

register_commands() uses deferred imports so ``busscope --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from busscope.commands.discover import discover
    from busscope.commands.names import names
    from busscope.commands.object_cmd import object_cmd
    from busscope.commands.service import service

    cli.add_command(names)
    cli.add_command(service)
    cli.add_command(object_cmd)
    cli.add_command(discover)
