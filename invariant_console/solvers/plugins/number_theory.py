"""
Number Theory Plugin
====================
Two classic reductions:

* binomial coefficients modulo a prime via Lucas's theorem (base-p digit
  decomposition, Fermat inverse for each digit binomial);
* Euler's totient by trial division.

The binomial branch does not check that the modulus is prime.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..base import InvariantPlugin, InvariantTag, SolveOutcome

_BINOMIAL_RES = (
    re.compile(
        r"(?:choose|ncr|\\binom|C)\s*\(?(\d+)(?:,|\s+|(?:\s+choose\s+))(\d+)\)?.*?(?:mod|divided by)\s*(\d+)",
        re.IGNORECASE,
    ),
    re.compile(r"\((\d+)\s+choose\s+(\d+)\).*?(?:mod|divided by)\s*(\d+)", re.IGNORECASE),
)


def binomial_mod_prime(n: int, r: int, p: int) -> int:
    """C(n, r) mod p for n, r < p, using Fermat's little theorem."""
    if r == 0:
        return 1
    if r > n:
        return 0
    num = 1
    for i in range(r):
        num = (num * (n - i)) % p
    den = 1
    for i in range(1, r + 1):
        den = (den * i) % p
    return (num * InvariantPlugin.mod_pow(den, p - 2, p)) % p


def lucas(n: int, k: int, p: int) -> int:
    if k == 0:
        return 1
    return (lucas(n // p, k // p, p) * binomial_mod_prime(n % p, k % p, p)) % p


def euler_totient(n: int) -> int:
    result = n
    remaining = n
    i = 2
    while i * i <= remaining:
        if remaining % i == 0:
            while remaining % i == 0:
                remaining //= i
            result -= result // i
        i += 1
    if remaining > 1:
        result -= result // remaining
    return result


class NumberTheoryPlugin(InvariantPlugin):

    # ── metadata ────────────────────────────────────────

    @property
    def key(self) -> str:
        return "number-theory"

    @property
    def name(self) -> str:
        return "Number Theory (Lucas + Totient)"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.NUMBER_THEORY

    @property
    def description(self) -> str:
        return "Binomial coefficients mod p via Lucas's theorem; Euler's totient."

    @property
    def triggers(self) -> List[str]:
        return ["totient", "phi"]

    # ── solving ─────────────────────────────────────────

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        for pattern in _BINOMIAL_RES:
            m = pattern.search(problem)
            if m:
                return self._solve_binomial(int(m.group(1)), int(m.group(2)), int(m.group(3)))

        lowered = problem.lower()
        coprime_count = "relatively prime" in lowered and "less than" in lowered
        if self.mentions_any(problem) or coprime_count:
            m = re.search(r"(\d+)", problem)
            if m:
                return self._solve_totient(int(m.group(1)))

        return None

    def _solve_binomial(self, n: int, k: int, p: int) -> SolveOutcome:
        ans = lucas(n, k, p)
        return self._outcome(
            ans,
            [
                f"Lucas's theorem trigger: n={n}, k={k}, mod p={p}",
                f"Decomposing n and k into base-{p} digits",
                "Applying (n choose k) ≡ Π (n_i choose k_i) mod p",
                f"Modular congruence: {ans}",
            ],
            [self.log(f"Lucas reduction engaged for binomial congruence mod {p}")],
        )

    def _solve_totient(self, n: int) -> SolveOutcome:
        phi = euler_totient(n)
        return self._outcome(
            phi,
            [
                f"Euler totient for n={n}",
                f"Prime factorization of {n} used in φ(n) = n·Π(1 - 1/p)",
                f"φ({n}) = {phi}",
            ],
            [self.log(f"Eulerian reduction complete for φ({n})")],
        )
