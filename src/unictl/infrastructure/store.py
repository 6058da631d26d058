"""LedgerStore — persisted ledger state with transactional access.

The store is the single dependency injected into every service. It owns the
database engine and the plugin manager. :meth:`LedgerStore.transaction`
opens a ``BEGIN IMMEDIATE`` transaction, so the SQLite write lock is held
before the snapshot is read and concurrent writers (other CLI processes)
queue behind it instead of committing over each other. It yields the ledger
for exactly one operation and writes the changed rows back on success. Any
exception raised inside the block rolls the database back, so the persisted
snapshot only ever moves between consistent states.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update

from unictl.domain.ledger import Ledger, LedgerSnapshot, TokenMetadata
from unictl.infrastructure.database.engine import init_database
from unictl.infrastructure.database.schema import balances, ledger_meta, minters

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from unictl.config.models import TokenConfig
    from unictl.config.settings import UniSettings
    from unictl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

_META_ID = 1


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class StoreError(Exception):
    """Base class for store lifecycle errors."""


class StoreNotInitializedError(StoreError):
    """The ledger database has not been created yet."""


class StoreAlreadyInitializedError(StoreError):
    """``initialize`` was called on a store that already holds a ledger."""


class StoreCorruptedError(StoreError):
    """The stored ledger state violates an accounting invariant."""


class LedgerStore:
    """Repository for the single ledger instance of a deployment."""

    def __init__(self, settings: UniSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._plugin_manager: PluginManager | None = None

    @property
    def settings(self) -> UniSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine (created lazily, tables ensured)."""
        if self._engine is None:
            self._engine = init_database(self._settings.db_path)
        return self._engine

    @property
    def plugin_manager(self) -> PluginManager | None:
        """Loaded plugin manager, or None until :meth:`init_plugins` runs."""
        return self._plugin_manager

    def init_plugins(self) -> list[str]:
        """Discover and load lifecycle plugins. Returns loaded plugin names."""
        from unictl.plugins.manager import PluginManager

        pm = PluginManager()
        local_dir = self._settings.plugin_dir if self._settings.plugins.enabled else None
        names = pm.discover_and_load(
            local_dir=local_dir, entry_points=self._settings.plugins.enabled
        )
        self._plugin_manager = pm
        return names

    def is_initialized(self) -> bool:
        """Whether a ledger has been created in this store."""
        if not self._settings.db_path.is_file():
            return False
        with self.engine.connect() as conn:
            row = conn.execute(
                select(ledger_meta.c.id).where(ledger_meta.c.id == _META_ID)
            ).first()
        return row is not None

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, token: TokenConfig) -> LedgerSnapshot:
        """Create the ledger from *token* config and persist it.

        Raises:
            StoreAlreadyInitializedError: If a ledger already exists.
            ValueError: If the token parameters are inconsistent.
        """
        ledger = Ledger(
            TokenMetadata(
                name=token.name,
                symbol=token.symbol,
                decimals=token.decimals,
                token_uri=token.token_uri,
            ),
            owner=token.owner,
            cap=token.cap,
            initial_supply=token.initial_supply,
        )
        snap = ledger.snapshot()
        ts = _now_iso()

        with self._locked() as conn:
            existing = conn.execute(
                select(ledger_meta.c.id).where(ledger_meta.c.id == _META_ID)
            ).first()
            if existing is not None:
                msg = f"Ledger already initialized at {self._settings.db_path}"
                raise StoreAlreadyInitializedError(msg)

            conn.execute(
                insert(ledger_meta).values(
                    id=_META_ID,
                    name=snap.metadata.name,
                    symbol=snap.metadata.symbol,
                    decimals=snap.metadata.decimals,
                    token_uri=snap.metadata.token_uri,
                    owner=snap.owner,
                    cap=str(snap.cap),
                    total_minted=str(snap.total_minted),
                    total_burned=str(snap.total_burned),
                    minting_enabled=int(snap.minting_enabled),
                    created=ts,
                    modified=ts,
                )
            )
            for identity, amount in snap.balances.items():
                conn.execute(insert(balances).values(identity=identity, amount=str(amount)))

        logger.debug("Initialized ledger %s at %s", snap.metadata.symbol, self._settings.db_path)
        return snap

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def load(self, *, strict: bool = True) -> Ledger:
        """Load the ledger for read-only use.

        With ``strict=False`` an inconsistent stored state is loaded as-is so
        it can be inspected by the integrity check.
        """
        self._require_db()
        with self.engine.connect() as conn:
            # One read transaction, so all three tables come from the same commit.
            conn.exec_driver_sql("BEGIN")
            return self._restore(self._read_snapshot(conn), strict=strict)

    @contextmanager
    def transaction(self) -> Iterator[Ledger]:
        """Yield the ledger for one mutating operation; persist on success.

        Usage::

            with store.transaction() as ledger:
                ledger.burn(caller, 500_000)
        """
        self._require_db()
        with self._locked() as conn:
            before = self._read_snapshot(conn)
            ledger = self._restore(before)
            yield ledger
            self._write_changes(conn, before, ledger.snapshot())

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[Connection]:
        """Write transaction that takes the database lock before its first read.

        pysqlite defers its implicit BEGIN until the first INSERT/UPDATE, which
        would let two writers read the same snapshot.
        """
        with self.engine.begin() as conn:
            conn.exec_driver_sql("BEGIN IMMEDIATE")
            yield conn

    def _require_db(self) -> None:
        if not self.is_initialized():
            msg = f"No ledger at {self._settings.db_path}. Run 'unictl init' first."
            raise StoreNotInitializedError(msg)

    def _restore(self, snap: LedgerSnapshot, *, strict: bool = True) -> Ledger:
        try:
            return Ledger.restore(snap, strict=strict)
        except ValueError as exc:
            msg = f"{exc} (in {self._settings.db_path}; run 'unictl check')"
            raise StoreCorruptedError(msg) from exc

    @staticmethod
    def _read_snapshot(conn: Connection) -> LedgerSnapshot:
        meta = conn.execute(select(ledger_meta).where(ledger_meta.c.id == _META_ID)).one()
        bal_rows = conn.execute(select(balances.c.identity, balances.c.amount)).fetchall()
        minter_rows = conn.execute(select(minters.c.identity)).fetchall()
        return LedgerSnapshot(
            metadata=TokenMetadata(
                name=meta.name,
                symbol=meta.symbol,
                decimals=meta.decimals,
                token_uri=meta.token_uri,
            ),
            owner=meta.owner,
            cap=int(meta.cap),
            total_minted=int(meta.total_minted),
            total_burned=int(meta.total_burned),
            minting_enabled=bool(meta.minting_enabled),
            balances={r.identity: int(r.amount) for r in bal_rows},
            minters=frozenset(r.identity for r in minter_rows),
        )

    @staticmethod
    def _write_changes(conn: Connection, before: LedgerSnapshot, after: LedgerSnapshot) -> None:
        """Write only the rows that differ between two snapshots."""
        ts = _now_iso()

        meta_changes: dict[str, object] = {}
        if after.total_minted != before.total_minted:
            meta_changes["total_minted"] = str(after.total_minted)
        if after.total_burned != before.total_burned:
            meta_changes["total_burned"] = str(after.total_burned)
        if after.minting_enabled != before.minting_enabled:
            meta_changes["minting_enabled"] = int(after.minting_enabled)

        for identity in before.balances.keys() | after.balances.keys():
            old = before.balances.get(identity, 0)
            new = after.balances.get(identity, 0)
            if old == new:
                continue
            if new == 0:
                conn.execute(delete(balances).where(balances.c.identity == identity))
            elif old == 0:
                conn.execute(insert(balances).values(identity=identity, amount=str(new)))
            else:
                conn.execute(
                    update(balances)
                    .where(balances.c.identity == identity)
                    .values(amount=str(new))
                )

        for identity in after.minters - before.minters:
            conn.execute(insert(minters).values(identity=identity, added=ts))
        for identity in before.minters - after.minters:
            conn.execute(delete(minters).where(minters.c.identity == identity))

        if after != before:
            meta_changes["modified"] = ts
            conn.execute(
                update(ledger_meta).where(ledger_meta.c.id == _META_ID).values(**meta_changes)
            )
