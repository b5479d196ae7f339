"""Pytest configuration and fixtures."""

import pytest

from invariant_console.solvers.dispatcher import InvariantSolver


POLYNOMIAL_PROBLEM = (
    "Quadratic polynomials P(x) and Q(x) have leading coefficients 2 and -2. "
    "They pass through (16,54) and (20,53). Find P(0)+Q(0)."
)


@pytest.fixture(scope="session")
def solver():
    """Solver with the default plugin order and modulus."""
    return InvariantSolver()


@pytest.fixture
def polynomial_problem():
    return POLYNOMIAL_PROBLEM
