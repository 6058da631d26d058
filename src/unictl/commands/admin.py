"""Command: owner administration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniCommand

if TYPE_CHECKING:
    from unictl.commands._context import AppContext


@click.command(
    "toggle-minting",
    cls=UniCommand,
    examples="  unictl --caller deployer toggle-minting",
)
@click.pass_obj
def toggle_minting(app: AppContext) -> None:
    """Flip the minting-enabled flag (owner only)."""
    from unictl.services.ledger import LedgerService

    app.emit(LedgerService(app.store).toggle_minting(app.settings.caller))
