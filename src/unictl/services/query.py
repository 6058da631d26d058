"""QueryService — read-only ledger queries.

Queries never fail for structural reasons: an identity that was never
funded has a zero balance. The only failure is a missing ledger store.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from unictl.infrastructure.store import StoreError
from unictl.services.base import BaseService
from unictl.services.result import ServiceResult
from unictl.services.telemetry import traced

if TYPE_CHECKING:
    from unictl.domain.ledger import Ledger


class QueryService(BaseService):
    """Exposes token metadata, balances, supply accounting, and roles."""

    @traced
    def info(self) -> ServiceResult:
        """Fixed metadata, owner, minting flag, and a supply snapshot."""
        return self._read(
            "info",
            lambda ledger: {
                "name": ledger.name,
                "symbol": ledger.symbol,
                "decimals": ledger.decimals,
                "token_uri": ledger.token_uri,
                "owner": ledger.owner,
                "minting_enabled": ledger.is_minting_enabled,
                "total_supply": ledger.total_supply,
                "remaining_supply": ledger.remaining_supply,
            },
        )

    @traced
    def balance(self, identity: str) -> ServiceResult:
        return self._read(
            "balance",
            lambda ledger: {
                "identity": identity,
                "balance": ledger.balance_of(identity),
                "decimals": ledger.decimals,
                "symbol": ledger.symbol,
            },
        )

    @traced
    def supply(self) -> ServiceResult:
        """Supply accounting snapshot."""
        return self._read(
            "supply",
            lambda ledger: {
                "total_supply": ledger.total_supply,
                "total_minted": ledger.total_minted,
                "total_burned": ledger.total_burned,
                "remaining_supply": ledger.remaining_supply,
                "cap": ledger.cap,
                "minting_enabled": ledger.is_minting_enabled,
                "decimals": ledger.decimals,
                "symbol": ledger.symbol,
            },
        )

    @traced
    def holders(self, *, limit: int | None = None) -> ServiceResult:
        """Identities with a non-zero balance, largest first."""

        def build(ledger: Ledger) -> dict[str, Any]:
            rows = ledger.holders()
            if limit is not None:
                rows = rows[:limit]
            return {
                "items": [{"identity": who, "balance": bal} for who, bal in rows],
                "count": len(rows),
                "decimals": ledger.decimals,
                "symbol": ledger.symbol,
            }

        return self._read("holders", build)

    @traced
    def minters(self) -> ServiceResult:
        def build(ledger: Ledger) -> dict[str, Any]:
            items = ledger.authorized_minters
            return {"items": [{"identity": who} for who in items], "count": len(items)}

        return self._read("minters", build)

    @traced
    def is_minter(self, identity: str) -> ServiceResult:
        return self._read(
            "is_minter",
            lambda ledger: {
                "identity": identity,
                "authorized": ledger.is_authorized_minter(identity),
            },
        )

    def _read(self, op: str, build: Callable[[Ledger], dict[str, Any]]) -> ServiceResult:
        try:
            ledger = self._store.load()
        except StoreError as exc:
            return self._store_failure(op, exc)
        return ServiceResult(ok=True, op=op, data=build(ledger))
