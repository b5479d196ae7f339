"""
Repeating Decimal Plugin
========================
A purely periodic decimal with period length L is k / (10^L - 1).
Summing the reduced numerators k / gcd(k, d) over k = 1..d, d = 10^L - 1,
gives the period invariant.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

_OVERLINE_RE = re.compile(r"\\overline\{(\d+)\}")
_PERIOD_RE = re.compile(r"period\s+of\s+(\d+)", re.IGNORECASE)

# Guards the O(d) summation against absurd period lengths.
MAX_PERIOD_LENGTH = 6


class RepeatingDecimalPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "repeating-decimal"

    @property
    def name(self) -> str:
        return "Repeating Decimal Periodicity"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.REPEATING_DECIMAL

    @property
    def description(self) -> str:
        return "Σ k / gcd(k, 10^L - 1) over one full period of length L."

    @property
    def triggers(self) -> List[str]:
        return ["repeating", "overline", "period"]

    # ── solving ─────────────────────────────────────────

    def period_length(self, problem: str) -> Optional[int]:
        m = _OVERLINE_RE.search(problem)
        if m:
            return len(m.group(1))
        m = _PERIOD_RE.search(problem)
        if m:
            return int(m.group(1))
        lowered = problem.lower()
        if "two digits" in lowered:
            return 2
        if "three digits" in lowered:
            return 3
        return None

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        length = self.period_length(problem)
        if length is None:
            return None
        if not 1 <= length <= MAX_PERIOD_LENGTH:
            raise ValueError(f"Unsupported period length {length}")

        d = 10 ** length - 1
        total = sum(k // self.gcd(k, d) for k in range(1, d + 1))

        return self._outcome(
            total % self.modulus,
            [
                f"Repeating decimal period: d={d}",
                "A purely periodic decimal 0.(period) equals period / (10^L - 1)",
                f"Summing k / gcd(k, d) over [1, {d}]",
                f"Total: {total}",
            ],
            [
                self.log(f"Period summation verified for d={d}"),
                self.log("Period closed.", Severity.SUCCESS),
            ],
        )
