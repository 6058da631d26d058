"""Ledger error taxonomy.

Numeric codes are stable and propagate verbatim to the caller. The service
layer exposes them as ``ServiceError.code`` (upper-snake name) with the
number in ``detail["code"]``.
"""

from __future__ import annotations

from enum import IntEnum


class LedgerErrorCode(IntEnum):
    """Failure codes returned by mutating ledger operations."""

    OWNER_ONLY = 100
    NOT_TOKEN_OWNER = 101
    INSUFFICIENT_BALANCE = 102
    INVALID_AMOUNT = 103
    MINTING_DISABLED = 104
    SUPPLY_CAP_EXCEEDED = 105


_MESSAGES: dict[LedgerErrorCode, str] = {
    LedgerErrorCode.OWNER_ONLY: "Caller lacks owner privilege for this operation",
    LedgerErrorCode.NOT_TOKEN_OWNER: "Caller may only move their own tokens",
    LedgerErrorCode.INSUFFICIENT_BALANCE: "Debit exceeds the account balance",
    LedgerErrorCode.INVALID_AMOUNT: "Amount must be a positive integer",
    LedgerErrorCode.MINTING_DISABLED: "Minting is currently disabled",
    LedgerErrorCode.SUPPLY_CAP_EXCEEDED: "Mint would exceed the total supply cap",
}


class LedgerError(Exception):
    """Raised by the ledger when an operation is rejected.

    Raised before any state is touched, so a caught ``LedgerError``
    always means the ledger is unchanged.
    """

    def __init__(self, code: LedgerErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message or _MESSAGES[code]
        super().__init__(f"[{int(code)}] {code.name}: {self.message}")
