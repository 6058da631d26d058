"""Plugin discovery, registration, and hook access.

Two discovery sources, both optional:

- installed distributions advertising the ``unictl.plugins`` entry point;
- single-file plugins (``*.py``, not starting with ``_``) in the local
  plugin directory, ``.unictl/plugins/`` by default.

A plugin is any object with ``@hookimpl`` methods. Classes found either way
are instantiated before registration.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from typing import TYPE_CHECKING

import pluggy

from unictl.plugins.hookspecs import UnictlHookSpec

if TYPE_CHECKING:
    from pathlib import Path
    from types import ModuleType

PROJECT_NAME = "unictl"
ENTRY_POINT_GROUP = "unictl.plugins"
LOCAL_MODULE_PREFIX = "unictl_local_plugin_"

logger = logging.getLogger(__name__)


def has_hookimpls(obj: object) -> bool:
    """Whether *obj* (a class or instance) defines any ``@hookimpl`` method."""
    return any(
        getattr(member, f"{PROJECT_NAME}_impl", None) is not None
        for name, member in inspect.getmembers(obj, callable)
        if not name.startswith("_")
    )


def _import_file(path: Path) -> ModuleType | None:
    module_name = LOCAL_MODULE_PREFIX + path.stem
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import plugin file %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        logger.warning("Plugin file %s failed to import", path, exc_info=True)
        return None
    return module


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` with unictl's hookspecs."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(UnictlHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Register plugins from entry points and/or *local_dir*.

        Returns the names of every registered plugin afterwards.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._instantiate_registered_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._load_file(path)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [
            self._pm.get_name(plugin) or type(plugin).__name__
            for plugin in self._pm.get_plugins()
        ]

    def _load_file(self, path: Path) -> None:
        """Register every hook-bearing class defined in the file at *path*.

        Import or construction failures are logged and skipped.
        """
        module = _import_file(path)
        if module is None:
            return
        for cls_name, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module.__name__ or not has_hookimpls(cls):
                continue
            try:
                plugin = cls()
            except Exception:
                logger.warning("Cannot instantiate %s from %s", cls_name, path, exc_info=True)
                continue
            self.register_plugin(plugin, name=f"{module.__name__}.{cls_name}")

    def _instantiate_registered_classes(self) -> None:
        """Swap entry-point classes for instances so hooks get a bound ``self``."""
        for plugin in list(self._pm.get_plugins()):
            if not (inspect.isclass(plugin) and has_hookimpls(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning("Cannot instantiate entry-point plugin %s", name, exc_info=True)
