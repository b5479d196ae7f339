"""
Geometric Plugin
================
Three mutually tangent spheres (or circles) with radii r1, r2, r3: their
centres form a triangle with sides r1+r2, r2+r3, r1+r3, whose area follows
from Heron's formula.
"""

from __future__ import annotations

import math
import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

_RADIUS_RE = re.compile(r"(?:radius|radii|r\d+)\s*(?:of|is|are|=)?\s*(\d+)", re.IGNORECASE)


def heron_area(a: float, b: float, c: float) -> float:
    s = (a + b + c) / 2
    return math.sqrt(s * (s - a) * (s - b) * (s - c))


class GeometricPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "geometric"

    @property
    def name(self) -> str:
        return "Geometric Vertex Analysis"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.GEOMETRIC

    @property
    def description(self) -> str:
        return "Heron's formula on the centre triangle of three tangent spheres."

    @property
    def triggers(self) -> List[str]:
        return [
            "sphere", "tangent", "radii", "radius", "circles",
            "kissing", "touching", "distance between centers",
        ]

    # ── solving ─────────────────────────────────────────

    def extract_radii(self, problem: str) -> List[int]:
        labelled = [int(r) for r in _RADIUS_RE.findall(problem)]
        if len(labelled) >= 3:
            return labelled
        candidates = [n for n in self.find_integers(problem) if 0 < n < 1000]
        return sorted(candidates)[:3]

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        if not self.mentions_any(problem):
            return None

        radii = self.extract_radii(problem)
        if len(radii) < 3:
            return None

        r1, r2, r3 = radii[:3]
        a, b, c = r1 + r2, r2 + r3, r1 + r3
        area = heron_area(a, b, c)
        # round half up
        rounded = math.floor(area + 0.5)

        return self._outcome(
            rounded % self.modulus,
            [
                f"Spherical kissing condition detected. Radii: {r1}, {r2}, {r3}",
                f"Centre triangle sides: a={a}, b={b}, c={c}",
                "Applying Heron's formula for the centre triangle area",
                f"Area: {area:.4f}",
            ],
            [
                self.log("Geometry engine mapping centre triangle"),
                self.log("Area resolved.", Severity.SUCCESS),
            ],
        )
