"""Command: ledger initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniCommand

if TYPE_CHECKING:
    from unictl.commands._context import AppContext


@click.command(
    "init",
    cls=UniCommand,
    examples="""\
  unictl init
  unictl -c ./deploy/unictl.toml init
  unictl --json init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the ledger from the [token] config, funding the owner."""
    from unictl.services.ledger import LedgerService

    app.emit(LedgerService(app.store).initialize(app.settings.token))
