"""End-to-end workflow through the CLI: scenarios A to E on one ledger."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from unictl.cli import cli

OWNER = "deployer"


def _run(runner: CliRunner, caller: str | None, *args: str) -> dict[str, Any]:
    prefix = ["--json"] + (["--caller", caller] if caller else [])
    result = runner.invoke(cli, [*prefix, *args])
    return json.loads(result.stdout if result.exit_code == 0 else result.stderr)


@pytest.mark.usefixtures("_isolated_root")
def test_full_lifecycle(cli_runner: CliRunner, tmp_path: Path) -> None:
    assert _run(cli_runner, None, "init")["ok"]

    # A: owner transfer
    assert _run(cli_runner, OWNER, "transfer", "1", OWNER, "wallet_1")["ok"]
    # B: stranger cannot mint
    assert _run(cli_runner, "wallet_1", "mint", "1", "wallet_1")["error"]["code"] == "OWNER_ONLY"
    # C: authorized minter
    _run(cli_runner, OWNER, "minters", "add", "wallet_1")
    assert _run(cli_runner, "wallet_1", "mint", "0.5", "wallet_2")["ok"]
    # D: minting disabled
    _run(cli_runner, OWNER, "toggle-minting")
    disabled = _run(cli_runner, "wallet_1", "mint", "1", "wallet_2")
    assert disabled["error"]["code"] == "MINTING_DISABLED"
    # E: burn
    assert _run(cli_runner, "wallet_1", "burn", "0.5")["ok"]

    supply = _run(cli_runner, None, "supply")["data"]
    assert supply["total_minted"] == 100_000_500_000
    assert supply["total_burned"] == 500_000
    assert supply["total_supply"] == 100_000_000_000
    assert supply["minting_enabled"] is False

    assert _run(cli_runner, None, "balance", "wallet_1")["data"]["balance"] == 500_000
    assert _run(cli_runner, None, "balance", "wallet_2")["data"]["balance"] == 500_000

    check = _run(cli_runner, None, "check")["data"]
    assert check["healthy"] is True
    assert check["balance_sum"] == supply["total_supply"]


@pytest.mark.usefixtures("_isolated_root")
def test_local_plugin_observes_commits(cli_runner: CliRunner, tmp_path: Path) -> None:
    plugin_dir = tmp_path / ".unictl" / "plugins"
    plugin_dir.mkdir(parents=True)
    log_file = tmp_path / "audit.log"
    (plugin_dir / "audit.py").write_text(
        "from pathlib import Path\n"
        "from unictl.plugins import hookimpl\n\n\n"
        "class Audit:\n"
        "    @hookimpl\n"
        "    def post_transfer(self, caller, sender, recipient, amount, memo):\n"
        f"        with Path({str(log_file)!r}).open('a') as fh:\n"
        "            fh.write(f'{sender}->{recipient}:{amount}:{memo}\\n')\n"
    )

    _run(cli_runner, None, "init")
    _run(cli_runner, OWNER, "transfer", "2", OWNER, "wallet_1", "--memo", "rent")
    _run(cli_runner, "wallet_1", "transfer", "5", "wallet_1", "wallet_2")  # rejected

    assert log_file.read_text().splitlines() == ["deployer->wallet_1:2000000:rent"]
