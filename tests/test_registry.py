"""
Tests for plugin discovery and the ordered registry
"""

from typing import List, Optional

from invariant_console.solvers.base import InvariantPlugin, InvariantTag, SolveOutcome
from invariant_console.solvers.plugins.modular import ModularPlugin
from invariant_console.solvers.registry import (
    DEFAULT_PLUGIN_ORDER,
    PluginRegistry,
    build_registry,
)


class EchoPlugin(InvariantPlugin):
    """Answers 7 to anything containing 'echo'."""

    @property
    def key(self) -> str:
        return "echo"

    @property
    def name(self) -> str:
        return "Echo"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.SEQUENCES

    @property
    def triggers(self) -> List[str]:
        return ["echo"]

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None
        return self._outcome(7, ["echo"], [])


class TestDiscovery:

    def test_discovers_every_plugin(self) -> None:
        classes = PluginRegistry.discover_plugin_classes()
        assert set(classes) == set(DEFAULT_PLUGIN_ORDER)

    def test_default_order(self) -> None:
        registry = build_registry(DEFAULT_PLUGIN_ORDER)
        assert registry.keys() == DEFAULT_PLUGIN_ORDER

    def test_unlisted_plugins_appended_alphabetically(self) -> None:
        registry = build_registry(["modular", "polynomial"])
        keys = registry.keys()
        assert keys[:2] == ["modular", "polynomial"]
        assert keys[2:] == sorted(k for k in DEFAULT_PLUGIN_ORDER if k not in ("modular", "polynomial"))

    def test_unknown_keys_are_skipped(self) -> None:
        registry = build_registry(["does-not-exist", "geometric", "geometric"])
        keys = registry.keys()
        assert "does-not-exist" not in keys
        assert keys[0] == "geometric"
        assert keys.count("geometric") == 1

    def test_modulus_propagates(self) -> None:
        registry = build_registry(modulus=97)
        assert all(p.modulus == 97 for p in registry)


class TestRegistration:

    def test_register_and_lookup(self) -> None:
        registry = PluginRegistry()
        registry.register(EchoPlugin())
        assert "echo" in registry
        assert registry.has("echo")
        assert isinstance(registry.get("echo"), EchoPlugin)
        assert registry.get("missing") is None

    def test_replacing_keeps_position_and_uniqueness(self) -> None:
        registry = PluginRegistry()
        first = EchoPlugin()
        registry.register(first)
        registry.register(ModularPlugin())
        replacement = EchoPlugin(modulus=11)
        registry.register(replacement)

        assert registry.keys() == ["echo", "modular"]
        assert len(registry) == 2
        assert registry.get("echo") is replacement

    def test_unregister(self) -> None:
        registry = PluginRegistry()
        registry.register(EchoPlugin())
        assert registry.unregister("echo") is True
        assert registry.unregister("echo") is False
        assert len(registry) == 0

    def test_clear(self) -> None:
        registry = build_registry()
        registry.clear()
        assert len(registry) == 0
        assert registry.keys() == []

    def test_list_plugins_positions(self) -> None:
        registry = build_registry(DEFAULT_PLUGIN_ORDER)
        infos = registry.list_plugins()
        assert [i.position for i in infos] == list(range(1, len(DEFAULT_PLUGIN_ORDER) + 1))
        assert [i.key for i in infos] == DEFAULT_PLUGIN_ORDER
        assert infos[0].tag == InvariantTag.SPECTRAL_ZETA.value
