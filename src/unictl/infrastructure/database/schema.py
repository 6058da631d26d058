"""SQLAlchemy Core table definitions for the ledger database.

Amounts are stored as decimal text: token amounts are unbounded Python
ints and may exceed SQLite's 64-bit INTEGER range for high-decimal tokens.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

# Single row (id = 1) holding the fixed parameters and supply counters.
ledger_meta = Table(
    "ledger_meta",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", Text, nullable=False),
    Column("symbol", Text, nullable=False),
    Column("decimals", Integer, nullable=False),
    Column("token_uri", Text),
    Column("owner", Text, nullable=False),
    Column("cap", Text, nullable=False),
    Column("total_minted", Text, nullable=False),
    Column("total_burned", Text, nullable=False, default="0", server_default="0"),
    Column("minting_enabled", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

balances = Table(
    "balances",
    metadata,
    Column("identity", Text, primary_key=True),
    Column("amount", Text, nullable=False),
)

minters = Table(
    "minters",
    metadata,
    Column("identity", Text, primary_key=True),
    Column("added", Text, nullable=False),
)
