"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the bus handle for this invocation (opened
lazily, closed when the command finishes) and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from busscope.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from busscope.config.settings import BusSettings
    from busscope.infrastructure.bus import BusConnection
    from busscope.services.result import ServiceResult


class AppContext:
    """Per-invocation state: settings, logging, and one bus connection.

    ``--help`` and ``--version`` never touch the bus; the connection is
    created on first access of :attr:`bus`.
    """

    def __init__(self, settings: BusSettings) -> None:
        self.settings = settings
        self._bus: BusConnection | None = None

        from busscope.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from busscope.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def bus(self) -> BusConnection:
        """Unopened-until-used connection to the configured bus."""
        if self._bus is None:
            from busscope.infrastructure.bus import open_bus

            self._bus = open_bus(self.settings.bus.kind, self.settings.bus.address)
        return self._bus

    def close(self) -> None:
        if self._bus is not None:
            self._bus.close()
            self._bus = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout. Warnings (failed objects) go to stderr so
          piped output stays clean.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
