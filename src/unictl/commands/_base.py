"""Click base classes adding an on-demand ``--examples`` flag.

``--help`` stays short; ``--examples`` prints worked invocations and exits
before arguments are validated, so it works on commands with required
arguments too.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Accepts ``examples=`` and exposes it as an eager ``--examples`` flag."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    is_eager=True,
                    expose_value=False,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class UniCommand(_ExamplesMixin, click.Command):
    """Command with ``--examples``."""


class UniGroup(_ExamplesMixin, click.Group):
    """Group with ``--examples``; its subcommands default to :class:`UniCommand`."""

    command_class = UniCommand
