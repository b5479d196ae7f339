"""
Invariant Plugin System
=======================
Ordered plugin registry with auto-discovery, a first-match dispatcher and
the boundary to the fallback reasoning service.

Usage:
    from invariant_console.solvers import InvariantSolver

    solver = InvariantSolver(modulus=100000)
    outcome = solver.solve("What is 3^4 mod 10?")

    # Registered plugins, in dispatch order
    solver.registry.list_plugins()

    # Escalate to the fallback when nothing matched
    outcome = await solve_with_fallback(solver, problem, FallbackClient())
"""

from .base import (
    DEFAULT_MODULUS,
    AttemptStatus,
    Citation,
    InvariantPlugin,
    InvariantTag,
    LogEntry,
    PluginAttempt,
    PluginInfo,
    Severity,
    SolveOutcome,
)
from .dispatcher import NO_MATCH_STEP, InvariantSolver, is_legacy_sentinel
from .fallback import FallbackClient, solve_with_fallback
from .registry import DEFAULT_PLUGIN_ORDER, PluginRegistry, build_registry

__all__ = [
    "DEFAULT_MODULUS",
    "DEFAULT_PLUGIN_ORDER",
    "NO_MATCH_STEP",
    "AttemptStatus",
    "Citation",
    "FallbackClient",
    "InvariantPlugin",
    "InvariantSolver",
    "InvariantTag",
    "LogEntry",
    "PluginAttempt",
    "PluginInfo",
    "PluginRegistry",
    "Severity",
    "SolveOutcome",
    "build_registry",
    "is_legacy_sentinel",
    "solve_with_fallback",
]
