"""
Tests for environment-driven settings
"""

from invariant_console.core.config import Settings
from invariant_console.solvers.registry import DEFAULT_PLUGIN_ORDER


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("OLLAMA_HOST", raising=False)
    settings = Settings(_env_file=None)
    assert settings.OLLAMA_HOST == "http://localhost:11434"
    assert settings.MODULUS == 100000
    assert settings.PLUGIN_ORDER == DEFAULT_PLUGIN_ORDER


def test_ollama_host_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    assert Settings(_env_file=None).OLLAMA_HOST == "http://gpu-box:11434"


def test_modulus_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("MODULUS", "997")
    assert Settings(_env_file=None).MODULUS == 997
