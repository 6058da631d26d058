"""SQLite engine for the ledger database.

One short-lived process per command means SQLAlchemy Core is enough: a
single ``engine.begin()`` block per operation, no ORM session. WAL keeps
readers from blocking while a command commits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event

from unictl.infrastructure.database.schema import metadata

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

_PRAGMAS = ("journal_mode=WAL", "synchronous=NORMAL")
# Seconds a writer waits for another process's lock before failing.
LOCK_TIMEOUT = 30.0


def _apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
    cursor = dbapi_conn.cursor()
    try:
        for pragma in _PRAGMAS:
            cursor.execute(f"PRAGMA {pragma}")
    finally:
        cursor.close()


def create_db_engine(db_path: Path) -> Engine:
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"timeout": LOCK_TIMEOUT})
    event.listen(engine, "connect", _apply_pragmas)
    return engine


def init_database(db_path: Path) -> Engine:
    """Open *db_path*, creating its directory and any missing tables.

    Safe to call on an existing database.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
