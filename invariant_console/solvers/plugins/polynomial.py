"""
Polynomial Plugin
=================
Two quadratics P and Q with known leading coefficients that both pass
through the same two points.  The linear and constant terms of each are
recovered by exact elimination and P(x)+Q(x) is evaluated at the target.

All intermediate values are `ExactFraction`s so large coordinates never
pick up floating-point error.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ...core.fraction import ExactFraction
from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

_COEFF_RE = re.compile(r"leading coeff.*?(-?\d+).*?(-?\d+)", re.IGNORECASE)
_POINT_RE = re.compile(r"\((-?\d+)\s*,\s*(-?\d+)\)")
_TARGET_RE = re.compile(r"(?:find|calculate|evaluate)\s+(?:p|q|p\+q)\((\d+)\)", re.IGNORECASE)

Point = Tuple[int, int]


def signed_mod(value: int, modulus: int) -> int:
    """Remainder that keeps the sign of *value* (truncated division)."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def quadratic_through(leading: int, p1: Point, p2: Point, x: int) -> ExactFraction:
    """Value at *x* of ``leading·x² + b·x + c`` passing through *p1* and *p2*.

    Coincident x-coordinates leave b undetermined; the curve is then
    defined to be zero.
    """
    (x1, y1), (x2, y2) = p1, p2
    if x1 == x2:
        return ExactFraction(0)

    r1 = ExactFraction(y1 - leading * x1 * x1)
    r2 = ExactFraction(y2 - leading * x2 * x2)

    b = r1.sub(r2).div(ExactFraction(x1 - x2))
    c = r1.sub(b.mul(ExactFraction(x1)))

    return ExactFraction(leading * x * x).add(b.mul(ExactFraction(x))).add(c)


class PolynomialPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "polynomial"

    @property
    def name(self) -> str:
        return "Polynomial Linear Reduction"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.POLYNOMIAL

    @property
    def description(self) -> str:
        return (
            "Recovers the linear and constant terms of two quadratics from "
            "shared points with exact fractions and evaluates P(x)+Q(x)."
        )

    @property
    def triggers(self) -> List[str]:
        return ["quadratic", "polynomial"]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        coeffs = _COEFF_RE.search(problem)
        points = _POINT_RE.findall(problem)
        if not coeffs or len(points) < 2:
            return None

        target = _TARGET_RE.search(problem.lower())
        x = int(target.group(1)) if target else 0

        a1, a2 = int(coeffs.group(1)), int(coeffs.group(2))
        p1 = (int(points[0][0]), int(points[0][1]))
        p2 = (int(points[1][0]), int(points[1][1]))

        p_val = quadratic_through(a1, p1, p2, x)
        q_val = quadratic_through(a2, p1, p2, x)
        total = p_val.add(q_val)

        return self._outcome(
            signed_mod(total.floor(), self.modulus),
            [
                f"Detected quadratic system: leading coeffs {a1}, {a2}",
                f"Reference points: {p1}, {p2}",
                "Linear reduction path: R(x) = P(x) + Q(x) - (a1+a2)x²",
                f"Evaluating at x={x}",
                f"P({x}) = {p_val}",
                f"Q({x}) = {q_val}",
                f"Invariant sum: {total}",
            ],
            [
                self.log(f"Polynomial reduction evaluated at x={x}"),
                self.log(f"Sum resolved: {total}", Severity.SUCCESS),
            ],
        )
