"""Command group: authorized-minter management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniGroup

if TYPE_CHECKING:
    from unictl.commands._context import AppContext


@click.group(
    cls=UniGroup,
    examples="""\
  unictl minters list
  unictl --caller deployer minters add wallet_1
  unictl --caller deployer minters remove wallet_1
  unictl minters check wallet_1""",
)
def minters() -> None:
    """Manage identities authorized to mint."""


@minters.command("list", examples="  unictl minters list")
@click.pass_obj
def list_minters(app: AppContext) -> None:
    """List authorized minters."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).minters())


@minters.command(examples="  unictl --caller deployer minters add wallet_1")
@click.argument("identity")
@click.pass_obj
def add(app: AppContext, identity: str) -> None:
    """Authorize IDENTITY to mint (owner only; no-op if already authorized)."""
    from unictl.services.ledger import LedgerService

    app.emit(LedgerService(app.store).add_minter(app.settings.caller, identity))


@minters.command(examples="  unictl --caller deployer minters remove wallet_1")
@click.argument("identity")
@click.pass_obj
def remove(app: AppContext, identity: str) -> None:
    """Revoke IDENTITY's mint rights (owner only; no-op if not a minter)."""
    from unictl.services.ledger import LedgerService

    app.emit(LedgerService(app.store).remove_minter(app.settings.caller, identity))


@minters.command(examples="  unictl -q minters check wallet_1")
@click.argument("identity")
@click.pass_obj
def check(app: AppContext, identity: str) -> None:
    """Show whether IDENTITY is an authorized minter."""
    from unictl.services.query import QueryService

    app.emit(QueryService(app.store).is_minter(identity))
