"""Tests for config section models."""

import pytest
from pydantic import ValidationError

from unictl.config.models import PluginsConfig, StoreConfig, TokenConfig


class TestTokenConfig:
    def test_defaults(self) -> None:
        token = TokenConfig()
        assert token.name == "UniCoin"
        assert token.symbol == "UNI"
        assert token.decimals == 6
        assert token.cap == 1_000_000_000_000
        assert token.initial_supply == 100_000_000_000
        assert token.owner == "deployer"
        assert token.token_uri is None

    def test_initial_supply_above_cap(self) -> None:
        with pytest.raises(ValidationError, match="exceeds cap"):
            TokenConfig(cap=10, initial_supply=11)

    @pytest.mark.parametrize("decimals", [-1, 19])
    def test_decimals_bounds(self, decimals: int) -> None:
        with pytest.raises(ValidationError):
            TokenConfig(decimals=decimals)

    def test_empty_owner(self) -> None:
        with pytest.raises(ValidationError):
            TokenConfig(owner="")

    def test_negative_cap(self) -> None:
        with pytest.raises(ValidationError):
            TokenConfig(cap=-1, initial_supply=0)

    def test_frozen(self) -> None:
        token = TokenConfig()
        with pytest.raises(ValidationError):
            token.cap = 5  # type: ignore[misc]


class TestOtherSections:
    def test_store_default(self) -> None:
        assert StoreConfig().path == ".unictl/ledger.db"

    def test_plugins_default(self) -> None:
        plugins = PluginsConfig()
        assert plugins.enabled is True
        assert plugins.local_dir == ".unictl/plugins"
