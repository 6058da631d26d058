"""LedgerService — attributed, atomic execution of ledger mutations.

Pipeline per operation: ATTRIBUTE → LOAD → APPLY → COMMIT → EVENT → RESPOND

The caller identity arrives as an explicit argument. The ledger runs every
check before mutating, and the store transaction commits only when the
operation returns normally, so a rejected call changes nothing either in
memory or on disk. Lifecycle hooks fire only after a successful commit.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from unictl.domain.errors import LedgerError
from unictl.infrastructure.store import StoreAlreadyInitializedError, StoreError
from unictl.services.base import BaseService
from unictl.services.result import ServiceResult
from unictl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from unictl.config.models import TokenConfig
    from unictl.domain.ledger import Ledger

log = structlog.get_logger(__name__)


def _ledger_failure(op: str, exc: LedgerError) -> ServiceResult:
    return ServiceResult.failure(op, exc.code.name, exc.message, code=int(exc.code))


class LedgerService(BaseService):
    """Runs one ledger mutation per call on behalf of a caller identity."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @traced
    def initialize(self, token: TokenConfig) -> ServiceResult:
        """Create the ledger, crediting the owner with the initial supply."""
        op = "init"
        try:
            snap = self._store.initialize(token)
        except StoreAlreadyInitializedError as exc:
            return ServiceResult.failure(op, "ALREADY_INITIALIZED", str(exc))
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_CONFIG", str(exc))

        warnings: list[str] = []
        self._dispatch_event(
            "post_init",
            {
                "name": snap.metadata.name,
                "symbol": snap.metadata.symbol,
                "owner": snap.owner,
                "initial_supply": snap.total_minted,
            },
            warnings,
        )
        log.info("ledger.init", symbol=snap.metadata.symbol, owner=snap.owner)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": snap.metadata.name,
                "symbol": snap.metadata.symbol,
                "decimals": snap.metadata.decimals,
                "token_uri": snap.metadata.token_uri,
                "owner": snap.owner,
                "cap": snap.cap,
                "initial_supply": snap.total_minted,
                "path": str(self._store.settings.db_path),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def transfer(
        self,
        caller: str | None,
        amount: int,
        sender: str,
        recipient: str,
        *,
        memo: str | None = None,
    ) -> ServiceResult:
        """Move *amount* from *sender* (who must be the caller) to *recipient*."""

        def apply(ledger: Ledger, who: str) -> dict[str, Any]:
            ledger.transfer(who, amount, sender, recipient, memo)
            return {
                "sender": sender,
                "recipient": recipient,
                "amount": amount,
                "memo": memo,
                "sender_balance": ledger.balance_of(sender),
                "recipient_balance": ledger.balance_of(recipient),
            }

        return self._execute(
            "transfer",
            caller,
            apply,
            hook="post_transfer",
            hook_payload=lambda d: {
                "sender": d["sender"],
                "recipient": d["recipient"],
                "amount": d["amount"],
                "memo": d["memo"],
            },
        )

    @traced
    def mint(self, caller: str | None, amount: int, recipient: str) -> ServiceResult:
        """Mint *amount* to *recipient*. Owner or authorized minter only."""

        def apply(ledger: Ledger, who: str) -> dict[str, Any]:
            ledger.mint(who, amount, recipient)
            return {
                "minter": who,
                "recipient": recipient,
                "amount": amount,
                "recipient_balance": ledger.balance_of(recipient),
                "total_minted": ledger.total_minted,
                "remaining_supply": ledger.remaining_supply,
            }

        return self._execute(
            "mint",
            caller,
            apply,
            hook="post_mint",
            hook_payload=lambda d: {"recipient": d["recipient"], "amount": d["amount"]},
        )

    @traced
    def burn(self, caller: str | None, amount: int) -> ServiceResult:
        """Burn *amount* of the caller's own balance."""

        def apply(ledger: Ledger, who: str) -> dict[str, Any]:
            ledger.burn(who, amount)
            return {
                "holder": who,
                "amount": amount,
                "balance": ledger.balance_of(who),
                "total_burned": ledger.total_burned,
                "total_supply": ledger.total_supply,
            }

        return self._execute(
            "burn",
            caller,
            apply,
            hook="post_burn",
            hook_payload=lambda d: {"amount": d["amount"]},
        )

    @traced
    def add_minter(self, caller: str | None, identity: str) -> ServiceResult:
        """Authorize *identity* to mint. Idempotent; owner only."""
        return self._change_minter("add_minter", caller, identity, authorize=True)

    @traced
    def remove_minter(self, caller: str | None, identity: str) -> ServiceResult:
        """Revoke *identity*'s mint rights. Idempotent; owner only."""
        return self._change_minter("remove_minter", caller, identity, authorize=False)

    @traced
    def toggle_minting(self, caller: str | None) -> ServiceResult:
        """Flip the minting-enabled flag. Owner only."""

        def apply(ledger: Ledger, who: str) -> dict[str, Any]:
            return {"minting_enabled": ledger.toggle_minting(who)}

        return self._execute(
            "toggle_minting",
            caller,
            apply,
            hook="post_toggle_minting",
            hook_payload=lambda d: {"enabled": d["minting_enabled"]},
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _change_minter(
        self, op: str, caller: str | None, identity: str, *, authorize: bool
    ) -> ServiceResult:
        def apply(ledger: Ledger, who: str) -> dict[str, Any]:
            was_member = ledger.is_authorized_minter(identity)
            if authorize:
                ledger.add_authorized_minter(who, identity)
            else:
                ledger.remove_authorized_minter(who, identity)
            is_member = ledger.is_authorized_minter(identity)
            return {
                "identity": identity,
                "authorized": is_member,
                "changed": was_member != is_member,
            }

        return self._execute(
            op,
            caller,
            apply,
            hook="post_minter_change",
            hook_payload=lambda d: {
                "identity": d["identity"],
                "authorized": d["authorized"],
                "changed": d["changed"],
            },
        )

    def _execute(
        self,
        op: str,
        caller: str | None,
        apply: Callable[[Ledger, str], dict[str, Any]],
        *,
        hook: str,
        hook_payload: Callable[[dict[str, Any]], dict[str, Any]],
    ) -> ServiceResult:
        """Run *apply* inside one store transaction, attributed to *caller*."""
        if not caller:
            return ServiceResult.failure(
                op, "NO_CALLER", "No caller identity given (use --caller or UNICTL_CALLER)"
            )

        try:
            with trace_span("transaction"), self._store.transaction() as ledger:
                data = apply(ledger, caller)
                data.update(decimals=ledger.decimals, symbol=ledger.symbol)
        except LedgerError as exc:
            log.info("ledger.rejected", op=op, caller=caller, code=int(exc.code))
            return _ledger_failure(op, exc)
        except StoreError as exc:
            return self._store_failure(op, exc)

        log.info("ledger.applied", op=op, caller=caller)
        warnings: list[str] = []
        with trace_span("dispatch"):
            self._dispatch_event(hook, {"caller": caller, **hook_payload(data)}, warnings)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
