"""Pluggy hook specifications for unictl lifecycle events.

Hooks fire synchronously after a ledger operation has committed. They
observe; they cannot veto or alter the operation.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("unictl")


class UnictlHookSpec:
    """Hook specifications for the unictl plugin system."""

    @hookspec
    def post_init(self, name: str, symbol: str, owner: str, initial_supply: int) -> None:
        """Called after the ledger is created."""

    @hookspec
    def post_transfer(
        self,
        caller: str,
        sender: str,
        recipient: str,
        amount: int,
        memo: str | None,
    ) -> None:
        """Called after a transfer. *memo* is passed through untouched."""

    @hookspec
    def post_mint(self, caller: str, recipient: str, amount: int) -> None:
        """Called after new tokens are minted."""

    @hookspec
    def post_burn(self, caller: str, amount: int) -> None:
        """Called after the caller burns tokens."""

    @hookspec
    def post_minter_change(
        self,
        caller: str,
        identity: str,
        authorized: bool,
        changed: bool,
    ) -> None:
        """Called after an add/remove minter call, including no-op ones."""

    @hookspec
    def post_toggle_minting(self, caller: str, enabled: bool) -> None:
        """Called after the minting flag flips."""

    @hookspec
    def post_check(self, issues_found: int) -> None:
        """Called after an integrity check."""
