"""Tests for database engine and schema creation."""

from pathlib import Path

from sqlalchemy import inspect, text

from unictl.infrastructure.database import init_database


class TestInitDatabase:
    def test_creates_parent_dirs_and_tables(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "ledger.db"
        engine = init_database(db_path)
        try:
            assert db_path.is_file()
            tables = set(inspect(engine).get_table_names())
            assert {"ledger_meta", "balances", "minters"} <= tables
        finally:
            engine.dispose()

    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path / "ledger.db")
        try:
            with engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar_one()
            assert mode.lower() == "wal"
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "ledger.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        engine.dispose()
