"""
Functional Equation Plugin
==========================
Shifted Cauchy equation f(m) + f(n) = f(m + n + mn).  With g(x) = f(x-1)
it becomes g(a) + g(b) = g(ab), so f(n) scales like log(n + 1).  The
answer is symbolic, not an evaluated integer.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, SolveOutcome

_TARGET_RE = re.compile(r"f\((\d+)\)")


class FunctionalEquationPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "functional-equation"

    @property
    def name(self) -> str:
        return "Functional Equation (Shifted Cauchy)"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.FUNCTIONAL_EQUATION

    @property
    def description(self) -> str:
        return "Recognises f(m) + f(n) = f(m + n + mn) and its logarithmic solutions."

    @property
    def triggers(self) -> List[str]:
        return ["f(m)", "f(n)", "f(m + n + mn)"]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        lowered = problem.lower()
        if not all(t in lowered for t in self.triggers):
            return None

        m = _TARGET_RE.search(lowered)
        if not m:
            return None

        n = int(m.group(1))
        return self._outcome(
            f"c * log({n + 1})",
            [
                "Shifted Cauchy functional equation detected",
                "Transformation: let g(x) = f(x-1)",
                "Identity: g(m+1) + g(n+1) = g((m+1)(n+1))",
                f"Deduction: f({n}) is a logarithmic scaling of {n + 1}",
            ],
            [self.log("Cauchy shift mapped.")],
        )
