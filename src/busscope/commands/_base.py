"""Click base classes adding an eager ``--examples`` flag.

``busscope service --examples`` prints sample invocations and exits, so
``--help`` can stay short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Attach ``--examples`` when the command was given example text."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if value:
                click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
                ctx.exit(0)

        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show,
                help="Show usage examples.",
            )
        )


class BusCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class BusGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are BusCommands by default."""

    command_class = BusCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
