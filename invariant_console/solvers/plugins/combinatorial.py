"""
Combinatorial Plugin
====================
Subset intersection identity: over all ordered pairs (A, B) of subsets of
an n-element set, Σ |A ∩ B| = n · 4^(n-1).
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

# Tried in order; the first pattern that yields n wins.
_INDEXED_RE = re.compile(r"s(?:_|\[|\{)?(\d+)(?:\]|\})?|n\s*=\s*(\d+)", re.IGNORECASE)
_SET_LITERAL_RE = re.compile(r"\{[\s\d,\.\w]+\}")
_ELEMENTS_RE = re.compile(
    r"set\s+(?:of\s+)?(\d+)\s+(?:elements|items|members|runners)", re.IGNORECASE
)


def extract_set_size(problem: str) -> Optional[int]:
    lowered = problem.lower()

    m = _INDEXED_RE.search(lowered)
    if m:
        return int(m.group(1) or m.group(2))

    m = _SET_LITERAL_RE.search(problem)
    if m:
        nums = re.findall(r"\d+", m.group(0))
        if nums:
            return int(nums[-1])

    m = _ELEMENTS_RE.search(lowered)
    if m:
        return int(m.group(1))

    return None


class CombinatorialPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "combinatorial"

    @property
    def name(self) -> str:
        return "Combinatorial Subset Identity"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.COMBINATORIAL

    @property
    def description(self) -> str:
        return "Σ |A ∩ B| over ordered subset pairs of an n-set equals n·4^(n-1)."

    @property
    def triggers(self) -> List[str]:
        return [
            "subset", "intersect", "s_n", "ordered pair", "set s",
            "size of the intersection", "sum over all pairs",
            "union and intersection",
        ]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        n = extract_set_size(problem)
        if n is None:
            return None
        if n < 1:
            raise ValueError(f"Set size must be positive, got {n}")

        m = self.modulus
        result = (n % m) * pow(4, n - 1, m) % m

        return self._outcome(
            result,
            [
                f"Subset intersection identity (S_n) for n={n}",
                "Mapping: Σ |A ∩ B| = n * 4^(n-1)",
                "Each element lies in both A and B for 1/4 of the 2^n * 2^n pairs",
                f"Calculation: {n} * 4^({n}-1) mod {m} = {result}",
            ],
            [
                self.log("Combinatorial identity mapped to 4^n space"),
                self.log("Identity resolved.", Severity.SUCCESS),
            ],
        )
