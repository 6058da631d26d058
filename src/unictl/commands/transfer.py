"""Commands: balance-moving operations (transfer, mint, burn).

AMOUNT is in token units (``1.5``) unless ``--raw`` is given, in which
case it is an integer count of micro-units.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from unictl.commands._base import UniCommand

if TYPE_CHECKING:
    from unictl.commands._context import AppContext

_RAW_HELP = "Treat AMOUNT as integer micro-units."
# Lets a negative AMOUNT reach the ledger instead of parsing as an option.
_SIGNED_AMOUNT = {"ignore_unknown_options": True}


@click.command(
    cls=UniCommand,
    context_settings=_SIGNED_AMOUNT,
    examples="""\
  unictl --caller deployer transfer 1 deployer wallet_1
  unictl --caller deployer transfer 1000000 deployer wallet_1 --raw
  unictl --caller wallet_1 transfer 0.25 wallet_1 wallet_2 --memo 'invoice 42'""",
)
@click.argument("amount")
@click.argument("sender")
@click.argument("recipient")
@click.option("--memo", default=None, help="Opaque note carried with the transfer.")
@click.option("--raw", is_flag=True, help=_RAW_HELP)
@click.pass_obj
def transfer(
    app: AppContext,
    amount: str,
    sender: str,
    recipient: str,
    memo: str | None,
    raw: bool,
) -> None:
    """Move AMOUNT from SENDER to RECIPIENT. The caller must be SENDER."""
    from unictl.services.ledger import LedgerService

    micro = app.amount(amount, raw=raw)
    app.emit(
        LedgerService(app.store).transfer(app.settings.caller, micro, sender, recipient, memo=memo)
    )


@click.command(
    cls=UniCommand,
    context_settings=_SIGNED_AMOUNT,
    examples="""\
  unictl --caller deployer mint 1 wallet_1
  unictl --caller wallet_1 mint 500000 wallet_2 --raw""",
)
@click.argument("amount")
@click.argument("recipient")
@click.option("--raw", is_flag=True, help=_RAW_HELP)
@click.pass_obj
def mint(app: AppContext, amount: str, recipient: str, raw: bool) -> None:
    """Mint AMOUNT new tokens to RECIPIENT (owner or authorized minter)."""
    from unictl.services.ledger import LedgerService

    micro = app.amount(amount, raw=raw)
    app.emit(LedgerService(app.store).mint(app.settings.caller, micro, recipient))


@click.command(
    cls=UniCommand,
    context_settings=_SIGNED_AMOUNT,
    examples="""\
  unictl --caller wallet_1 burn 0.5
  unictl --caller wallet_1 burn 500000 --raw""",
)
@click.argument("amount")
@click.option("--raw", is_flag=True, help=_RAW_HELP)
@click.pass_obj
def burn(app: AppContext, amount: str, raw: bool) -> None:
    """Burn AMOUNT of the caller's own tokens."""
    from unictl.services.ledger import LedgerService

    micro = app.amount(amount, raw=raw)
    app.emit(LedgerService(app.store).burn(app.settings.caller, micro))
