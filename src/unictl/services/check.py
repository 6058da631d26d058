"""CheckService — integrity verification of the stored ledger.

Loads the persisted state without the strict restore guard and reports
every violated accounting invariant. Read-only: nothing is repaired.
"""

from __future__ import annotations

from unictl.infrastructure.store import StoreNotInitializedError
from unictl.services.base import BaseService
from unictl.services.result import ServiceResult
from unictl.services.telemetry import trace_span, traced


class CheckService(BaseService):
    """Verifies conservation, cap, and non-negativity on stored state."""

    @traced
    def check(self) -> ServiceResult:
        try:
            with trace_span("load"):
                ledger = self._store.load(strict=False)
        except StoreNotInitializedError as exc:
            return self._store_failure("check", exc)

        with trace_span("invariants"):
            issues = ledger.check_invariants()

        warnings: list[str] = []
        self._dispatch_event("post_check", {"issues_found": len(issues)}, warnings)

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "healthy": not issues,
                "count": len(issues),
                "issues": issues,
                "holders": len(ledger.holders()),
                "total_supply": ledger.total_supply,
                "balance_sum": sum(bal for _, bal in ledger.holders()),
            },
            warnings=warnings,
        )
