"""
Modular Plugin
==============
Fast modular exponentiation: ``a^b mod m`` by binary square-and-multiply.
"""

from __future__ import annotations

import re
from typing import Optional

from ..base import InvariantPlugin, InvariantTag, Severity, SolveOutcome

_POWER_MOD_RE = re.compile(
    r"(\d+)\s*\^\s*\{?(\d+)\}?.*?(?:mod|divided by)\s*(\d+)", re.IGNORECASE
)


class ModularPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "modular"

    @property
    def name(self) -> str:
        return "Modular Exponentiation"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.MODULAR

    @property
    def description(self) -> str:
        return "a^b mod m in O(log b) multiplications."

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        m = _POWER_MOD_RE.search(problem)
        if not m:
            return None

        base, exponent, modulus = (int(g) for g in m.groups())
        if modulus == 0:
            raise ZeroDivisionError("modulus must be positive")

        result = self.mod_pow(base, exponent, modulus)

        return self._outcome(
            result,
            [
                f"Fast modular exponentiation: {base}^{exponent} (mod {modulus})",
                "Complexity: O(log exp) traversal",
                "Algorithm: binary square-and-multiply",
                f"Outcome: {result}",
            ],
            [
                self.log(f"Congruence class established for modulus {modulus}"),
                self.log("Fast traversal successful.", Severity.SUCCESS),
            ],
        )
