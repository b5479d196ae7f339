"""
Exact rational arithmetic
=========================
Arbitrary-precision fraction used wherever an answer must stay an exact
integer through a chain of intermediate products (polynomial
interpolation, series sums).

Values are always stored in lowest terms with the sign on the numerator.
Conversion to ``float`` is only meant for display at the boundary.
"""

from __future__ import annotations

import math
from typing import Tuple, Union


class DivisionByZero(ZeroDivisionError):
    """Raised when a fraction would end up with a zero denominator."""


class ExactFraction:
    """Immutable, normalized ``numerator / denominator`` pair."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        numerator = int(numerator)
        denominator = int(denominator)
        if denominator == 0:
            raise DivisionByZero("Denominator cannot be zero")

        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        common = math.gcd(numerator, denominator)
        object.__setattr__(self, "_numerator", numerator // common)
        object.__setattr__(self, "_denominator", denominator // common)

    def __setattr__(self, name, value):
        raise AttributeError("ExactFraction is immutable")

    # ── constructors ────────────────────────────────────

    @classmethod
    def of(cls, value: "FractionLike") -> "ExactFraction":
        """Coerce an int, an ``(n, d)`` pair or a fraction into a fraction."""
        if isinstance(value, ExactFraction):
            return value
        if isinstance(value, tuple):
            return cls(value[0], value[1])
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Cannot build an exact fraction from {value!r}")
        return cls(value)

    # ── components ──────────────────────────────────────

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def is_integer(self) -> bool:
        return self._denominator == 1

    def floor(self) -> int:
        """Exact floor (no float round-trip)."""
        return self._numerator // self._denominator

    # ── arithmetic ──────────────────────────────────────

    def add(self, other: "FractionLike") -> "ExactFraction":
        other = ExactFraction.of(other)
        return ExactFraction(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def sub(self, other: "FractionLike") -> "ExactFraction":
        other = ExactFraction.of(other)
        return ExactFraction(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def mul(self, other: "FractionLike") -> "ExactFraction":
        other = ExactFraction.of(other)
        return ExactFraction(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def div(self, other: "FractionLike") -> "ExactFraction":
        other = ExactFraction.of(other)
        if other._numerator == 0:
            raise DivisionByZero(f"Cannot divide {self} by zero")
        return ExactFraction(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div

    def __neg__(self) -> "ExactFraction":
        return ExactFraction(-self._numerator, self._denominator)

    # ── conversion ──────────────────────────────────────

    def to_float(self) -> float:
        """Lossy widening division, for final display only."""
        return self._numerator / self._denominator

    __float__ = to_float

    def as_tuple(self) -> Tuple[int, int]:
        return self._numerator, self._denominator

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"ExactFraction({self._numerator}, {self._denominator})"

    # ── comparison ──────────────────────────────────────

    def __eq__(self, other) -> bool:
        if isinstance(other, ExactFraction):
            return self.as_tuple() == other.as_tuple()
        if isinstance(other, int) and not isinstance(other, bool):
            return self._denominator == 1 and self._numerator == other
        return NotImplemented

    def __hash__(self) -> int:
        # integral values hash like the equal int
        if self._denominator == 1:
            return hash(self._numerator)
        return hash(self.as_tuple())


FractionLike = Union[int, Tuple[int, int], ExactFraction]
