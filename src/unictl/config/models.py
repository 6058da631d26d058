"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, unictl.toml only contains
overrides. Token parameters are read once by ``unictl init`` and are
immutable in the ledger afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

# --- unictl.toml sections ---


class TokenConfig(BaseModel):
    """[token] section."""

    model_config = {"frozen": True}

    name: str = Field(default="UniCoin", min_length=1)
    symbol: str = Field(default="UNI", min_length=1)
    decimals: int = Field(default=6, ge=0, le=18)
    cap: int = Field(default=1_000_000_000_000, ge=0)
    initial_supply: int = Field(default=100_000_000_000, ge=0)
    owner: str = Field(default="deployer", min_length=1)
    token_uri: str | None = None

    @model_validator(mode="after")
    def _supply_within_cap(self) -> TokenConfig:
        if self.initial_supply > self.cap:
            msg = f"initial_supply ({self.initial_supply}) exceeds cap ({self.cap})"
            raise ValueError(msg)
        return self


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: str = ".unictl/ledger.db"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".unictl/plugins"
