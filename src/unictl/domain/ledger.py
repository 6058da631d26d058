"""Ledger — the token accounting state machine.

The ledger owns balances, supply counters, the authorized-minter set, the
minting-enabled flag, and the owner identity. Every mutating operation takes
the calling identity as an explicit ``caller`` argument and runs all of its
checks before touching state, so a rejected call leaves the ledger exactly as
it was.

INVARIANTS (hold after every operation):
  - sum(balances) == total_minted - total_burned
  - total_minted <= cap
  - total_burned <= total_minted
  - every balance >= 0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from unictl.domain.errors import LedgerError, LedgerErrorCode


@dataclass(frozen=True)
class TokenMetadata:
    """Fixed token metadata, constant for the lifetime of the ledger."""

    name: str
    symbol: str
    decimals: int
    token_uri: str | None = None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Complete, immutable copy of ledger state (used for persistence)."""

    metadata: TokenMetadata
    owner: str
    cap: int
    total_minted: int
    total_burned: int
    minting_enabled: bool
    balances: dict[str, int] = field(default_factory=dict)
    minters: frozenset[str] = frozenset()


def _is_valid_amount(amount: object) -> bool:
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0


class Ledger:
    """Single-owner fungible token ledger with a fixed supply cap."""

    def __init__(
        self,
        metadata: TokenMetadata,
        *,
        owner: str,
        cap: int,
        initial_supply: int,
    ) -> None:
        if not owner:
            msg = "Ledger owner identity must be non-empty"
            raise ValueError(msg)
        if cap < 0 or initial_supply < 0:
            msg = "Cap and initial supply must be non-negative"
            raise ValueError(msg)
        if initial_supply > cap:
            msg = f"Initial supply {initial_supply} exceeds cap {cap}"
            raise ValueError(msg)

        self._metadata = metadata
        self._owner = owner
        self._cap = cap
        self._balances: dict[str, int] = {}
        self._minters: set[str] = set()
        self._minting_enabled = True
        self._total_minted = initial_supply
        self._total_burned = 0
        if initial_supply > 0:
            self._balances[owner] = initial_supply

    @classmethod
    def restore(cls, snapshot: LedgerSnapshot, *, strict: bool = True) -> Ledger:
        """Rebuild a ledger from a snapshot.

        Raises:
            ValueError: If *strict* and the snapshot violates an invariant.
        """
        ledger = cls(snapshot.metadata, owner=snapshot.owner, cap=snapshot.cap, initial_supply=0)
        ledger._balances = {k: v for k, v in snapshot.balances.items() if v != 0}
        ledger._minters = set(snapshot.minters)
        ledger._minting_enabled = snapshot.minting_enabled
        ledger._total_minted = snapshot.total_minted
        ledger._total_burned = snapshot.total_burned

        violations = ledger.check_invariants()
        if strict and violations:
            msg = "Inconsistent ledger snapshot: " + "; ".join(violations)
            raise ValueError(msg)
        return ledger

    def snapshot(self) -> LedgerSnapshot:
        """Return an immutable copy of the current state."""
        return LedgerSnapshot(
            metadata=self._metadata,
            owner=self._owner,
            cap=self._cap,
            total_minted=self._total_minted,
            total_burned=self._total_burned,
            minting_enabled=self._minting_enabled,
            balances=dict(self._balances),
            minters=frozenset(self._minters),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._metadata.name

    @property
    def symbol(self) -> str:
        return self._metadata.symbol

    @property
    def decimals(self) -> int:
        return self._metadata.decimals

    @property
    def token_uri(self) -> str | None:
        return self._metadata.token_uri

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def cap(self) -> int:
        return self._cap

    @property
    def total_minted(self) -> int:
        return self._total_minted

    @property
    def total_burned(self) -> int:
        return self._total_burned

    @property
    def total_supply(self) -> int:
        """Circulating supply: everything minted minus everything burned."""
        return self._total_minted - self._total_burned

    @property
    def remaining_supply(self) -> int:
        """Headroom left under the cap for future mints."""
        return self._cap - self._total_minted

    @property
    def is_minting_enabled(self) -> bool:
        return self._minting_enabled

    def balance_of(self, identity: str) -> int:
        """Balance of *identity*; zero if it was never funded."""
        return self._balances.get(identity, 0)

    def is_authorized_minter(self, identity: str) -> bool:
        return identity in self._minters

    @property
    def authorized_minters(self) -> list[str]:
        return sorted(self._minters)

    def holders(self) -> list[tuple[str, int]]:
        """Identities with a non-zero balance, largest first."""
        return sorted(self._balances.items(), key=lambda kv: (-kv[1], kv[0]))

    def check_invariants(self) -> list[str]:
        """Return a description of every violated accounting invariant."""
        violations: list[str] = []
        negative = [who for who, bal in self._balances.items() if bal < 0]
        if negative:
            violations.append(f"negative balances for {sorted(negative)}")
        held = sum(self._balances.values())
        if held != self.total_supply:
            violations.append(
                f"sum of balances {held} != total_minted - total_burned {self.total_supply}"
            )
        if self._total_minted > self._cap:
            violations.append(f"total_minted {self._total_minted} exceeds cap {self._cap}")
        if self._total_burned > self._total_minted:
            violations.append(
                f"total_burned {self._total_burned} exceeds total_minted {self._total_minted}"
            )
        if self._total_burned < 0:
            violations.append("total_burned is negative")
        return violations

    # ------------------------------------------------------------------
    # Mutations (explicit caller)
    # ------------------------------------------------------------------

    def transfer(
        self,
        caller: str,
        amount: int,
        sender: str,
        recipient: str,
        memo: str | bytes | None = None,
    ) -> bool:
        """Move *amount* from *sender* to *recipient*. Only the sender may call.

        *memo* is opaque and never affects state.
        """
        if caller != sender:
            raise LedgerError(LedgerErrorCode.NOT_TOKEN_OWNER)
        if not _is_valid_amount(amount):
            raise LedgerError(LedgerErrorCode.INVALID_AMOUNT)
        if self.balance_of(sender) < amount:
            raise LedgerError(LedgerErrorCode.INSUFFICIENT_BALANCE)

        self._debit(sender, amount)
        self._credit(recipient, amount)
        return True

    def mint(self, caller: str, amount: int, recipient: str) -> bool:
        """Create *amount* new tokens for *recipient*. Owner or authorized minter only."""
        if caller != self._owner and caller not in self._minters:
            raise LedgerError(LedgerErrorCode.OWNER_ONLY)
        if not self._minting_enabled:
            raise LedgerError(LedgerErrorCode.MINTING_DISABLED)
        if not _is_valid_amount(amount):
            raise LedgerError(LedgerErrorCode.INVALID_AMOUNT)
        if self._total_minted + amount > self._cap:
            raise LedgerError(LedgerErrorCode.SUPPLY_CAP_EXCEEDED)

        self._credit(recipient, amount)
        self._total_minted += amount
        return True

    def burn(self, caller: str, amount: int) -> bool:
        """Destroy *amount* of the caller's own tokens."""
        if not _is_valid_amount(amount):
            raise LedgerError(LedgerErrorCode.INVALID_AMOUNT)
        if self.balance_of(caller) < amount:
            raise LedgerError(LedgerErrorCode.INSUFFICIENT_BALANCE)

        self._debit(caller, amount)
        self._total_burned += amount
        return True

    def add_authorized_minter(self, caller: str, identity: str) -> bool:
        """Grant mint rights to *identity*. No-op if already a minter."""
        self._require_owner(caller)
        if identity not in self._minters:
            self._minters.add(identity)
        return True

    def remove_authorized_minter(self, caller: str, identity: str) -> bool:
        """Revoke mint rights from *identity*. No-op if not a minter."""
        self._require_owner(caller)
        if identity in self._minters:
            self._minters.remove(identity)
        return True

    def toggle_minting(self, caller: str) -> bool:
        """Flip the minting-enabled flag and return its new value."""
        self._require_owner(caller)
        self._minting_enabled = not self._minting_enabled
        return self._minting_enabled

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise LedgerError(LedgerErrorCode.OWNER_ONLY)

    def _credit(self, identity: str, amount: int) -> None:
        self._balances[identity] = self._balances.get(identity, 0) + amount

    def _debit(self, identity: str, amount: int) -> None:
        # zero balance is equivalent to absence
        remaining = self._balances[identity] - amount
        if remaining:
            self._balances[identity] = remaining
        else:
            del self._balances[identity]
