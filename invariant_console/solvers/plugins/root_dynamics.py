"""
Root Dynamics Plugin
====================
Monic quadratics x^2 + bx + c = 0:

* sum of the roots      e1 = -b              (Vieta)
* sum of their squares  p2 = e1^2 - 2·e2     (Newton, e2 = c)
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, SolveOutcome

_MONIC_QUADRATIC_RE = re.compile(
    r"x\^2\s*([+-]\s*\d*)\s*x\s*([+-]\s*\d*)\s*=\s*0", re.IGNORECASE
)


def _signed_coefficient(raw: str) -> int:
    compact = re.sub(r"\s", "", raw)
    if compact == "+":
        return 1
    if compact == "-":
        return -1
    if compact == "":
        return 0
    return int(compact)


class RootDynamicsPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "root-dynamics"

    @property
    def name(self) -> str:
        return "Root Dynamics (Vieta/Newton)"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.ROOT_DYNAMICS

    @property
    def description(self) -> str:
        return "Vieta and Newton identities on monic quadratics."

    @property
    def triggers(self) -> List[str]:
        return ["root"]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        m = _MONIC_QUADRATIC_RE.search(problem)
        if not m:
            return None

        b = _signed_coefficient(m.group(1))
        # A bare sign for the constant term is malformed: int() raises here.
        c = int(re.sub(r"\s", "", m.group(2)))
        e1, e2 = -b, c

        lowered = problem.lower()
        if "sum of the roots" in lowered:
            return self._outcome(
                e1,
                [
                    f"Quadratic detected: x² + {b}x + {c} = 0",
                    f"Vieta's formula: sum = -b/a = {e1}",
                ],
                [self.log("Vieta identity resolved sum of roots.")],
            )

        if "sum of the squares" in lowered:
            sum_squares = e1 * e1 - 2 * e2
            return self._outcome(
                sum_squares,
                [
                    f"Quadratic detected: x² + {b}x + {c} = 0",
                    "Newton's sums: P₂ = e₁P₁ - 2e₂",
                    f"P₁ = e₁ = {e1}",
                    f"P₂ = {e1}({e1}) - 2({e2}) = {sum_squares}",
                ],
                [self.log("Newton-Vieta identity resolved sum of squares.")],
            )

        return None
