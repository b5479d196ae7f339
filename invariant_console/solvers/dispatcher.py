"""
Invariant Solver - the dispatcher facade over the plugin registry.

Runs plugins in registry order and returns the first accepted outcome.
No scoring between plugins: the earlier plugin always wins.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .base import (
    DEFAULT_MODULUS,
    AttemptStatus,
    LogEntry,
    Severity,
    SolveOutcome,
)
from .registry import DEFAULT_PLUGIN_ORDER, PluginRegistry, build_registry

logger = logging.getLogger(__name__)

NO_MATCH_STEP = "No deterministic invariant matched."


def is_legacy_sentinel(outcome: SolveOutcome) -> bool:
    """Answer exactly integer 0 with no tag: the historic "no match" value."""
    answer = outcome.answer
    return (
        outcome.invariant_tag is None
        and isinstance(answer, int)
        and not isinstance(answer, bool)
        and answer == 0
    )


def no_match_outcome(trail: Sequence[LogEntry] = ()) -> SolveOutcome:
    return SolveOutcome(
        answer=0,
        invariant_tag=None,
        steps=(NO_MATCH_STEP,),
        logs=tuple(trail) + (
            LogEntry.create(
                "All deterministic invariants bypassed; consult the fallback reasoning service.",
                Severity.WARNING,
            ),
        ),
    )


class InvariantSolver:
    """
    Deterministic solver.  Immutable after construction: the registry is
    built once and only read by `solve`, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        modulus: int = DEFAULT_MODULUS,
        plugin_order: Optional[Sequence[str]] = None,
        registry: Optional[PluginRegistry] = None,
    ) -> None:
        if plugin_order is None:
            plugin_order = DEFAULT_PLUGIN_ORDER
        self._modulus = modulus
        self._registry = registry if registry is not None else build_registry(plugin_order, modulus)

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    def plugin_names(self) -> List[str]:
        return self._registry.keys()

    def solve(self, problem: str) -> SolveOutcome:
        trail: List[LogEntry] = []

        for plugin in self._registry.all_in_order():
            attempt = plugin.attempt(problem)

            if attempt.status is AttemptStatus.FAULT:
                trail.append(LogEntry.create(
                    f"Plugin {attempt.plugin_key} skipped after internal fault ({attempt.error})",
                    Severity.WARNING,
                ))
                continue

            if attempt.status is AttemptStatus.NO_MATCH:
                continue

            outcome = attempt.outcome
            if outcome is None or is_legacy_sentinel(outcome):
                continue

            logger.info("Plugin %s resolved problem (answer=%s)", plugin.key, outcome.answer)
            return outcome.with_logs(before=trail)

        logger.info("No deterministic invariant matched")
        return no_match_outcome(trail)
