"""Tests for transfer, mint, burn, minters, and toggle-minting commands."""

from __future__ import annotations

import json
from typing import Any

import pytest
from click.testing import CliRunner

from unictl.cli import cli

OWNER = "deployer"


def _json(cli_runner: CliRunner, *args: str) -> dict[str, Any]:
    result = cli_runner.invoke(cli, ["--json", *args])
    stream = result.stdout if result.exit_code == 0 else result.stderr
    return json.loads(stream)


def _balance(cli_runner: CliRunner, identity: str) -> int:
    return _json(cli_runner, "balance", identity)["data"]["balance"]


@pytest.fixture
def initialized(cli_runner: CliRunner, _isolated_root: None) -> None:
    assert cli_runner.invoke(cli, ["init"]).exit_code == 0


@pytest.mark.usefixtures("initialized")
class TestTransferCommand:
    def test_token_units(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--caller", OWNER, "transfer", "1", OWNER, "wallet_1"])
        assert result.exit_code == 0
        assert "1 UNI (1000000)" in result.stdout
        assert _balance(cli_runner, "wallet_1") == 1_000_000

    def test_raw_units(self, cli_runner: CliRunner) -> None:
        args = ["--caller", OWNER, "transfer", "250000", OWNER, "wallet_1", "--raw"]
        assert cli_runner.invoke(cli, args).exit_code == 0
        assert _balance(cli_runner, "wallet_1") == 250_000

    def test_memo_echoed(self, cli_runner: CliRunner) -> None:
        data = _json(
            cli_runner, "--caller", OWNER, "transfer", "0.5", OWNER, "wallet_1", "--memo", "inv-42"
        )
        assert data["data"]["memo"] == "inv-42"
        assert data["data"]["amount"] == 500_000

    def test_not_token_owner(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--caller", "wallet_1", "transfer", "1", OWNER, "wallet_2"]
        )
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "NOT_TOKEN_OWNER" in result.stderr
        assert _balance(cli_runner, OWNER) == 100_000_000_000

    def test_caller_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UNICTL_CALLER", OWNER)
        result = cli_runner.invoke(cli, ["transfer", "2", OWNER, "wallet_1"])
        assert result.exit_code == 0
        assert _balance(cli_runner, "wallet_1") == 2_000_000

    def test_no_caller(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "transfer", "1", OWNER, "wallet_1")
        assert data["error"]["code"] == "NO_CALLER"

    @pytest.mark.parametrize("amount", ["abc", "0.0000001", "1e999999999"])
    def test_malformed_amount(self, cli_runner: CliRunner, amount: str) -> None:
        result = cli_runner.invoke(cli, ["--caller", OWNER, "transfer", amount, OWNER, "w"])
        assert result.exit_code == 2
        assert "AMOUNT" in result.stderr

    def test_zero_amount_is_ledger_error(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "transfer", "0", OWNER, "wallet_1")
        assert data["error"]["code"] == "INVALID_AMOUNT"
        assert data["error"]["detail"]["code"] == 103

    def test_negative_amount_is_ledger_error(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "transfer", "-1", OWNER, "wallet_1")
        assert data["error"]["code"] == "INVALID_AMOUNT"
        assert _balance(cli_runner, OWNER) == 100_000_000_000


@pytest.mark.usefixtures("initialized")
class TestMintCommand:
    def test_owner_mint(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "mint", "1", "wallet_1")
        assert data["ok"] is True
        assert data["data"]["total_minted"] == 100_001_000_000

    def test_scenario_b(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", "wallet_1", "mint", "1", "wallet_1")
        assert data["error"]["code"] == "OWNER_ONLY"
        assert data["error"]["detail"]["code"] == 100

    def test_scenario_c_and_d(self, cli_runner: CliRunner) -> None:
        assert _json(cli_runner, "--caller", OWNER, "minters", "add", "wallet_1")["ok"]
        minted = _json(cli_runner, "--caller", "wallet_1", "mint", "500000", "wallet_2", "--raw")
        assert minted["ok"] is True
        assert _balance(cli_runner, "wallet_2") == 500_000

        toggled = _json(cli_runner, "--caller", OWNER, "toggle-minting")
        assert toggled["data"]["minting_enabled"] is False
        for caller in (OWNER, "wallet_1"):
            data = _json(cli_runner, "--caller", caller, "mint", "1", "wallet_2")
            assert data["error"]["code"] == "MINTING_DISABLED"

    def test_cap_exceeded(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "mint", "900000.000001", "wallet_1")
        assert data["error"]["code"] == "SUPPLY_CAP_EXCEEDED"
        assert data["error"]["detail"]["code"] == 105

    @pytest.mark.parametrize("args", [["-1", "wallet_1"], ["-500000", "wallet_1", "--raw"]])
    def test_negative_amount_is_ledger_error(self, cli_runner: CliRunner, args: list[str]) -> None:
        data = _json(cli_runner, "--caller", OWNER, "mint", *args)
        assert data["error"]["code"] == "INVALID_AMOUNT"
        assert data["error"]["detail"]["code"] == 103


@pytest.mark.usefixtures("initialized")
class TestBurnCommand:
    def test_scenario_e(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "--caller", OWNER, "transfer", "1.5", OWNER, "wallet_1")
        zero = _json(cli_runner, "--caller", "wallet_1", "burn", "0")
        assert zero["error"]["code"] == "INVALID_AMOUNT"

        burned = _json(cli_runner, "--caller", "wallet_1", "burn", "0.5")
        assert burned["ok"] is True
        assert burned["data"]["balance"] == 1_000_000
        assert burned["data"]["total_burned"] == 500_000

    def test_insufficient(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", "wallet_1", "burn", "1")
        assert data["error"]["code"] == "INSUFFICIENT_BALANCE"
        assert data["error"]["detail"]["code"] == 102

    def test_negative_amount_is_ledger_error(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "burn", "-1.5")
        assert data["error"]["code"] == "INVALID_AMOUNT"
        assert data["error"]["detail"]["code"] == 103


@pytest.mark.usefixtures("initialized")
class TestMintersCommands:
    def test_add_list_check_remove(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["--caller", OWNER, "minters", "add", "wallet_1"])
        listed = cli_runner.invoke(cli, ["-q", "minters", "list"])
        assert listed.stdout.strip() == "wallet_1"

        checked = cli_runner.invoke(cli, ["-q", "minters", "check", "wallet_1"])
        assert checked.stdout.strip() == "True"

        removed = _json(cli_runner, "--caller", OWNER, "minters", "remove", "wallet_1")
        assert removed["data"]["changed"] is True
        assert _json(cli_runner, "minters", "list")["data"]["items"] == []

    def test_remove_never_added(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", OWNER, "minters", "remove", "ghost")
        assert data["ok"] is True
        assert data["data"]["changed"] is False

    def test_non_owner(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "--caller", "wallet_1", "minters", "add", "wallet_1")
        assert data["error"]["code"] == "OWNER_ONLY"

    def test_empty_list_rendering(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["minters", "list"])
        assert result.exit_code == 0
        assert "no authorized minters" in result.stdout


@pytest.mark.usefixtures("initialized")
class TestToggleMintingCommand:
    def test_non_owner(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--caller", "wallet_1", "toggle-minting"])
        assert result.exit_code == 1
        assert "OWNER_ONLY" in result.stderr

    def test_quiet_prints_new_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--caller", OWNER, "toggle-minting"])
        assert result.stdout.strip() == "False"
