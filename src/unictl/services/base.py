"""Shared plumbing for the ledger services.

Each service wraps one :class:`LedgerStore`. Services decide their own
transaction boundaries (``self._store.transaction()`` for mutations,
``self._store.load()`` for reads) and always answer with a ServiceResult.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from unictl.infrastructure.store import StoreError, StoreNotInitializedError
from unictl.services.result import ServiceResult

if TYPE_CHECKING:
    from unictl.infrastructure.store import LedgerStore

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the store and turns store and plugin problems into results."""

    def __init__(self, store: LedgerStore) -> None:
        self._store = store

    @staticmethod
    def _store_failure(op: str, exc: StoreError) -> ServiceResult:
        code = "NOT_INITIALIZED" if isinstance(exc, StoreNotInitializedError) else "CORRUPT_LEDGER"
        return ServiceResult.failure(op, code, str(exc))

    def _dispatch_event(
        self, hook_name: str, payload: dict[str, Any], warnings: list[str]
    ) -> None:
        """Fire *hook_name* on every registered plugin, after commit.

        Does nothing until the store has loaded plugins. A raising plugin
        adds an entry to *warnings*; the operation still succeeds.
        """
        pm = self._store.plugin_manager
        if pm is None:
            return
        try:
            getattr(pm.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s raised", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
