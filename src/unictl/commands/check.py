"""Command: ledger integrity check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniCommand

if TYPE_CHECKING:
    from unictl.commands._context import AppContext


@click.command(cls=UniCommand, examples="  unictl check\n  unictl --json check")
@click.pass_obj
def check(app: AppContext) -> None:
    """Verify conservation, cap, and non-negative balances on stored state."""
    from unictl.services.check import CheckService

    app.emit(CheckService(app.store).check())
