"""Commands: read-only ledger queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniCommand

if TYPE_CHECKING:
    from unictl.commands._context import AppContext


@click.command(cls=UniCommand, examples="  unictl info\n  unictl --json info")
@click.pass_obj
def info(app: AppContext) -> None:
    """Show token metadata, owner, and minting status."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).info())


@click.command(
    cls=UniCommand,
    examples="  unictl balance deployer\n  unictl -q balance wallet_1",
)
@click.argument("identity")
@click.pass_obj
def balance(app: AppContext, identity: str) -> None:
    """Show the balance of IDENTITY (zero if never funded)."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).balance(identity))


@click.command(cls=UniCommand, examples="  unictl supply\n  unictl --json supply")
@click.pass_obj
def supply(app: AppContext) -> None:
    """Show total, minted, burned, and remaining supply."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).supply())


@click.command(cls=UniCommand, examples="  unictl holders\n  unictl holders --limit 10")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show the top N only.")
@click.pass_obj
def holders(app: AppContext, limit: int | None) -> None:
    """List identities holding a non-zero balance, largest first."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).holders(limit=limit))
