"""Tests for plugin loading through the store settings."""

from __future__ import annotations

from pathlib import Path

from unictl.config.settings import UniSettings
from unictl.infrastructure.store import LedgerStore

PLUGIN = """\
from unictl.plugins import hookimpl


class Noop:
    @hookimpl
    def post_check(self, issues_found):
        pass
"""


def _write_plugin(root: Path) -> None:
    plugin_dir = root / ".unictl" / "plugins"
    plugin_dir.mkdir(parents=True)
    (plugin_dir / "noop.py").write_text(PLUGIN)


class TestInitPlugins:
    def test_plugin_manager_absent_until_loaded(self, store: LedgerStore) -> None:
        assert store.plugin_manager is None

    def test_local_plugins_loaded(self, tmp_path: Path) -> None:
        _write_plugin(tmp_path)
        store = LedgerStore(UniSettings.from_cli(root=tmp_path))
        assert "unictl_local_plugin_noop.Noop" in store.init_plugins()
        assert store.plugin_manager is not None

    def test_disabled_plugins(self, tmp_path: Path) -> None:
        _write_plugin(tmp_path)
        (tmp_path / "unictl.toml").write_text("[plugins]\nenabled = false\n")
        store = LedgerStore(UniSettings.from_cli(root=tmp_path))
        assert store.init_plugins() == []
