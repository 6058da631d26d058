"""Shared pytest fixtures for unictl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from unictl.config.models import TokenConfig
from unictl.config.settings import UniSettings
from unictl.domain.ledger import Ledger, TokenMetadata
from unictl.infrastructure.store import LedgerStore
from unictl.services.telemetry import disable_telemetry

OWNER = "deployer"
CAP = 1_000_000_000_000
INITIAL_SUPPLY = 100_000_000_000


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host UNICTL_* variables and telemetry state out of tests."""
    for var in ("UNICTL_CONFIG", "UNICTL_CALLER", "UNICTL_ROOT", "UNICTL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ledger() -> Ledger:
    """Fresh in-memory ledger: UniCoin, cap 1M tokens, 100k tokens to the owner."""
    return Ledger(
        TokenMetadata(name="UniCoin", symbol="UNI", decimals=6),
        owner=OWNER,
        cap=CAP,
        initial_supply=INITIAL_SUPPLY,
    )


@pytest.fixture
def settings(tmp_path: Path) -> UniSettings:
    return UniSettings.from_cli(root=tmp_path)


@pytest.fixture
def store(settings: UniSettings) -> Iterator[LedgerStore]:
    """Uninitialized store rooted at a temp directory."""
    s = LedgerStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def ready_store(store: LedgerStore) -> LedgerStore:
    """Store holding a freshly initialized default ledger."""
    store.initialize(TokenConfig())
    return store


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated ledger.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)
