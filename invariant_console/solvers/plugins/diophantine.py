"""
Diophantine Plugin
==================
Frobenius coin problem for two generators: the largest integer that is
not a non-negative combination of coprime a and b is ab - a - b.
Non-coprime generators leave infinitely many gaps.
"""

from __future__ import annotations

from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

MIN_GENERATOR = 2
MAX_GENERATOR = 500


def frobenius_number(a: int, b: int) -> int:
    return a * b - a - b


class DiophantinePlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "diophantine"

    @property
    def name(self) -> str:
        return "Diophantine (Frobenius)"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.DIOPHANTINE

    @property
    def description(self) -> str:
        return "Frobenius boundary g(a, b) = ab - a - b for two coprime generators."

    @property
    def triggers(self) -> List[str]:
        return [
            "largest integer", "cannot be written", "cannot be expressed",
            "impossible sum", "chicken mcnugget", "frobenius",
        ]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        generators = [
            n for n in self.find_integers(problem)
            if MIN_GENERATOR <= n <= MAX_GENERATOR
        ]
        if len(generators) < 2:
            return None

        a, b = generators[0], generators[1]
        g = self.gcd(a, b)

        if g != 1:
            return self._outcome(
                "Infinity",
                [
                    f"Coefficients {a}, {b} are not relatively prime (gcd={g})",
                    "Non-coprime generators leave infinite gaps.",
                ],
                [self.log("Frobenius singularity detected (gcd > 1)", Severity.ERROR)],
            )

        result = frobenius_number(a, b)
        return self._outcome(
            result % self.modulus,
            [
                "Trigger: Frobenius boundary invariant",
                f"Identified generators: a={a}, b={b}",
                f"Condition: gcd({a}, {b}) = 1 verified.",
                "Applying formula: g(a,b) = ab - a - b",
                f"Outcome: {a}*{b} - {a} - {b} = {result}",
            ],
            [
                self.log(f"Diophantine boundary resolved for generators {{{a}, {b}}}"),
                self.log("Gaps verified.", Severity.SUCCESS),
            ],
        )
