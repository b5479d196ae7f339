"""
Spectral Zeta Plugin
====================
Partial Dirichlet sum of zeta on the critical line,
Σ n^(-1/2)·cos(t·ln n) for n = 1..400, scored as 1/|sum|.

This is a numerical heuristic, not an exact invariant: the sum is
evaluated in floating point on purpose.
"""

from __future__ import annotations

import re
from typing import List, Optional

import numpy as np

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

FIRST_ZERO_ORDINATE = 14.1347
CRITICAL_LINE = 0.5
TERM_LIMIT = 400

_FREQUENCY_RE = re.compile(
    r"(?:frequency|t|s_imag)\b\s*(?:is|are|=|t=)?\s*(?:t\s*=\s*)?(\d+(?:\.\d+)?)",
    re.IGNORECASE,
)
_DECIMAL_RE = re.compile(r"(\d+\.\d+)")


def dirichlet_partial_sum(t: float, limit: int = TERM_LIMIT) -> float:
    """Real part of Σ n^(-s) at s = 1/2 + it, truncated at *limit* terms."""
    n = np.arange(1, limit + 1, dtype=np.float64)
    terms = np.power(n, -CRITICAL_LINE) * np.cos(t * np.log(n))
    return float(terms.sum())


class SpectralZetaPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "spectral-zeta"

    @property
    def name(self) -> str:
        return "Spectral Zeta"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.SPECTRAL_ZETA

    @property
    def description(self) -> str:
        return (
            "Dirichlet partial-sum heuristic on Re(s)=1/2; reports the "
            "spectral score 1/|Σ n^-1/2 cos(t ln n)|."
        )

    @property
    def triggers(self) -> List[str]:
        return [
            "spectral score", "zeta sum", "riemann", "euler score",
            "critical line", "frequency t", "spectral nonce",
        ]

    # ── solving ─────────────────────────────────────────

    def extract_frequency(self, problem: str) -> float:
        m = _FREQUENCY_RE.search(problem)
        if m:
            return float(m.group(1))
        m = _DECIMAL_RE.search(problem)
        if m:
            return float(m.group(1))
        return FIRST_ZERO_ORDINATE

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        t = self.extract_frequency(problem)
        spectral_sum = dirichlet_partial_sum(t)
        magnitude = abs(spectral_sum)
        score = 1.0 / magnitude if magnitude > 0 else 9999.9

        return self._outcome(
            f"{score:.4f}",
            [
                f"Analyzing Dirichlet series Re(s)={CRITICAL_LINE}",
                f"Extracted frequency parameter t={t}",
                f"Summing Σ n^-0.5 * cos(t * ln n) for n=[1, {TERM_LIMIT}]",
                f"Partial zeta sum: {spectral_sum:.6f}",
                f"Spectral score (1/|Sum|): {score:.4f}",
            ],
            [
                self.log(f"Zeta convergence engine engaged for t={t}"),
                self.log(f"Score resolved: {score:.4f}", Severity.SUCCESS),
            ],
        )
