"""SQLite database engine and schema via SQLAlchemy Core."""

from unictl.infrastructure.database.engine import create_db_engine, init_database
from unictl.infrastructure.database.schema import balances, ledger_meta, metadata, minters

__all__ = [
    "balances",
    "create_db_engine",
    "init_database",
    "ledger_meta",
    "metadata",
    "minters",
]
