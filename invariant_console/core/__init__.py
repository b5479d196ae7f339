"""Core building blocks: configuration and exact arithmetic."""

from .fraction import DivisionByZero, ExactFraction

__all__ = ["DivisionByZero", "ExactFraction"]
