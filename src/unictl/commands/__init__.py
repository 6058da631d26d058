"""Subcommand modules for unictl.

Provides register_commands() which uses deferred imports to keep
``unictl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from unictl.commands.minters import minters

    cli.add_command(minters)

    # --- Standalone commands ---
    from unictl.commands.admin import toggle_minting
    from unictl.commands.check import check
    from unictl.commands.init_cmd import init_cmd
    from unictl.commands.query import balance, holders, info, supply
    from unictl.commands.transfer import burn, mint, transfer

    cli.add_command(init_cmd)
    cli.add_command(info)
    cli.add_command(balance)
    cli.add_command(supply)
    cli.add_command(holders)
    cli.add_command(transfer)
    cli.add_command(mint)
    cli.add_command(burn)
    cli.add_command(toggle_minting)
    cli.add_command(check)
