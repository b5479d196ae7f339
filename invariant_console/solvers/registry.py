"""
Plugin Registry - ordered catalogue of invariant plugins.

Auto-discovers plugins from the ``plugins/`` sub-package.  Dispatch
priority is the registry's insertion order, which discovery derives from
an explicit configured key order rather than from import order.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Type

from .base import DEFAULT_MODULUS, InvariantPlugin, PluginInfo

logger = logging.getLogger(__name__)

PLUGINS_PACKAGE = f"{__package__}.plugins"

DEFAULT_PLUGIN_ORDER: List[str] = [
    "spectral-zeta",
    "polynomial",
    "number-theory",
    "combinatorial",
    "diophantine",
    "repeating-decimal",
    "modular",
    "geometric",
    "sequences",
    "root-dynamics",
    "functional-equation",
]


class PluginRegistry:
    """
    Insertion-ordered mapping of plugin key → plugin instance.

    Registering an existing key replaces that entry in place, so a key
    never appears twice and keeps its original dispatch position.
    """

    def __init__(self) -> None:
        self._plugins: Dict[str, InvariantPlugin] = {}

    # ── registration ────────────────────────────────────

    def register(self, plugin: InvariantPlugin) -> None:
        key = plugin.key
        if key in self._plugins:
            logger.debug("Plugin '%s' already registered, replacing", key)
        self._plugins[key] = plugin
        logger.debug("Registered invariant plugin: %s (%s)", key, plugin.name)

    def unregister(self, key: str) -> bool:
        return self._plugins.pop(key, None) is not None

    def clear(self) -> None:
        self._plugins.clear()

    # ── discovery ───────────────────────────────────────

    @staticmethod
    def discover_plugin_classes() -> Dict[str, Type[InvariantPlugin]]:
        """Scan the ``plugins`` package and collect InvariantPlugin subclasses by key."""
        plugins_path = Path(__file__).parent / "plugins"
        found: Dict[str, Type[InvariantPlugin]] = {}

        for _finder, module_name, _is_pkg in pkgutil.iter_modules([str(plugins_path)]):
            if module_name.startswith("_"):
                continue
            fqn = f"{PLUGINS_PACKAGE}.{module_name}"
            try:
                mod = importlib.import_module(fqn)
            except Exception as exc:
                logger.error("Failed to load plugin module '%s': %s", fqn, exc)
                continue

            for _attr_name, obj in inspect.getmembers(mod, inspect.isclass):
                if (
                    issubclass(obj, InvariantPlugin)
                    and obj.__module__ == mod.__name__
                    and not inspect.isabstract(obj)
                ):
                    try:
                        key = obj().key
                    except Exception as exc:
                        logger.error("Failed to instantiate %s: %s", obj.__name__, exc)
                        continue
                    found[key] = obj

        return found

    def discover_plugins(
        self,
        order: Optional[Sequence[str]] = None,
        modulus: int = DEFAULT_MODULUS,
    ) -> None:
        """Instantiate every discovered plugin and register it.

        Keys listed in *order* come first, in that order; any other
        discovered plugin is appended alphabetically.  Unknown keys in
        *order* are logged and skipped.
        """
        classes = self.discover_plugin_classes()
        ordered_keys: List[str] = []

        for key in order or ():
            if key not in classes:
                logger.warning("Configured plugin '%s' was not found, skipping", key)
                continue
            if key not in ordered_keys:
                ordered_keys.append(key)

        ordered_keys.extend(sorted(k for k in classes if k not in ordered_keys))

        for key in ordered_keys:
            self.register(classes[key](modulus=modulus))

        logger.info(
            "Plugin registry loaded %d plugins: %s",
            len(self._plugins),
            ", ".join(self._plugins.keys()),
        )

    # ── queries ─────────────────────────────────────────

    def get(self, key: str) -> Optional[InvariantPlugin]:
        return self._plugins.get(key)

    def has(self, key: str) -> bool:
        return key in self._plugins

    def keys(self) -> List[str]:
        return list(self._plugins.keys())

    def all_in_order(self) -> List[InvariantPlugin]:
        return list(self._plugins.values())

    def list_plugins(self) -> List[PluginInfo]:
        """Return PluginInfo for every registered plugin, in dispatch order."""
        return [p.to_info(i) for i, p in enumerate(self._plugins.values(), start=1)]

    def __contains__(self, key: object) -> bool:
        return key in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self) -> Iterator[InvariantPlugin]:
        return iter(self.all_in_order())


def build_registry(
    order: Optional[Sequence[str]] = None,
    modulus: int = DEFAULT_MODULUS,
) -> PluginRegistry:
    """Return a fresh registry populated from the plugins package."""
    registry = PluginRegistry()
    registry.discover_plugins(order=order, modulus=modulus)
    return registry
