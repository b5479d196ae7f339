"""
Invariant Console - deterministic invariant-matching problem solver
"""

__version__ = "1.0.0"
