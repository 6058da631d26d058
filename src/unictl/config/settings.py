"""UniSettings: one frozen object built from every configuration layer.

Highest priority first:

1. CLI flags (passed to :meth:`UniSettings.from_cli`; ``None`` means unset)
2. ``UNICTL_*`` environment variables, ``__`` for nesting
   (``UNICTL_TOKEN__SYMBOL=TST``)
3. ``unictl.toml`` (``--config``, ``UNICTL_CONFIG``, or walk-up discovery)
4. Defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from unictl.config.discovery import find_config
from unictl.config.models import PluginsConfig, StoreConfig, TokenConfig

# TOML file for the settings object currently being built by from_cli().
_toml_file: ContextVar[Path | None] = ContextVar("unictl_toml_file", default=None)


def _under(root: Path, configured: str) -> Path:
    path = Path(configured)
    return path if path.is_absolute() else root / path


class UniSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        root: Directory that relative store and plugin paths hang off
            (the TOML file's directory, or the CWD).
        config_path: The TOML file that was read, if any.
        caller: Identity attributed to mutating commands.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="UNICTL_",
        env_nested_delimiter="__",
    )

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    caller: str | None = None
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    token: TokenConfig = Field(default_factory=TokenConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def db_path(self) -> Path:
        return _under(self.root, self.store.path)

    @property
    def plugin_dir(self) -> Path:
        return _under(self.root, self.plugins.local_dir)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_toml_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> UniSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist means "no TOML";
        it does not fall back to discovery.

        Raises:
            click.ClickException: If the TOML is malformed or a value fails
                validation.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        token = _toml_file.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **overrides)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        except ValidationError as exc:
            msg = f"Invalid configuration ({toml_path or 'environment'}): {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)
