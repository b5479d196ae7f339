"""
Sequences Plugin
================
Arithmetic series: S_n = n/2 · (2a + (n-1)d), evaluated exactly.

Geometric-series phrasing routes here as well but has no closed form
implemented yet, so it falls through to no match.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ...core.fraction import ExactFraction
from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

_ARITHMETIC_RE = re.compile(
    r"arithmetic.*?first term\s*(\d+).*?common difference\s*(\d+).*?(\d+)\s*terms",
    re.IGNORECASE,
)


def arithmetic_sum(first: int, difference: int, count: int) -> ExactFraction:
    return ExactFraction(count, 2).mul(2 * first + (count - 1) * difference)


class SequencesPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "sequences"

    @property
    def name(self) -> str:
        return "Sequence Progression Analysis"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.SEQUENCES

    @property
    def description(self) -> str:
        return "Closed-form sum of an arithmetic progression."

    @property
    def triggers(self) -> List[str]:
        return ["progression", "arithmetic series", "geometric series"]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        m = _ARITHMETIC_RE.search(problem.lower())
        if not m:
            return None

        a, d, n = (int(g) for g in m.groups())
        total = arithmetic_sum(a, d, n)

        return self._outcome(
            total.floor(),
            [
                "Arithmetic progression detected",
                f"a={a}, d={d}, n={n}",
                "Formula: S_n = n/2 * (2a + (n-1)d)",
                f"Result: {total}",
            ],
            [self.log("Arithmetic series closed.", Severity.SUCCESS)],
        )
