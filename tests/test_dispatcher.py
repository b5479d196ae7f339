"""
Tests for first-match dispatch through the solver facade
"""

from typing import Optional

import pytest

from invariant_console.solvers.base import InvariantPlugin, InvariantTag, Severity, SolveOutcome
from invariant_console.solvers.dispatcher import (
    NO_MATCH_STEP,
    InvariantSolver,
    is_legacy_sentinel,
)
from invariant_console.solvers.plugins.combinatorial import CombinatorialPlugin
from invariant_console.solvers.plugins.modular import ModularPlugin
from invariant_console.solvers.registry import PluginRegistry


class ExplodingPlugin(InvariantPlugin):

    @property
    def key(self) -> str:
        return "exploding"

    @property
    def name(self) -> str:
        return "Exploding"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.SEQUENCES

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        raise RuntimeError("boom")


class SentinelPlugin(InvariantPlugin):
    """Returns the historic zero/no-tag value instead of None."""

    @property
    def key(self) -> str:
        return "sentinel"

    @property
    def name(self) -> str:
        return "Sentinel"

    @property
    def tag(self) -> InvariantTag:
        return InvariantTag.SEQUENCES

    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        return SolveOutcome(answer=0, invariant_tag=None)


def solver_with(*plugins: InvariantPlugin) -> InvariantSolver:
    registry = PluginRegistry()
    for plugin in plugins:
        registry.register(plugin)
    return InvariantSolver(registry=registry)


# =============================================================================
# SCENARIOS
# =============================================================================


@pytest.mark.parametrize(
    "problem, tag, answer",
    [
        (
            "Quadratic polynomials P(x) and Q(x) have leading coefficients 2 and -2. "
            "They pass through (16,54) and (20,53). Find P(0)+Q(0).",
            InvariantTag.POLYNOMIAL,
            116,
        ),
        (
            "What is the largest integer that cannot be written as a sum of multiples of 6 and 11?",
            InvariantTag.DIOPHANTINE,
            49,
        ),
        (
            "Let S = {1, 2}. Find the sum of the sizes of the intersections of all "
            "ordered pairs of subsets of S.",
            InvariantTag.COMBINATORIAL,
            8,
        ),
        ("What is 3^4 mod 10?", InvariantTag.MODULAR, 1),
        (
            "Find the sum of the squares of the roots of x^2 - 5x + 6 = 0.",
            InvariantTag.ROOT_DYNAMICS,
            13,
        ),
        (
            "Find the sum of the arithmetic progression with first term 3, "
            "common difference 4, and 10 terms.",
            InvariantTag.SEQUENCES,
            210,
        ),
    ],
)
def test_scenarios(solver, problem, tag, answer) -> None:
    outcome = solver.solve(problem)
    assert outcome.invariant_tag is tag
    assert outcome.answer == answer


def test_no_match_returns_sentinel(solver) -> None:
    outcome = solver.solve("How many apples are in a basket if I have 2 and give 1 away?")
    assert outcome.invariant_tag is None
    assert outcome.answer == 0
    assert outcome.steps == (NO_MATCH_STEP,)
    assert outcome.logs[-1].severity is Severity.WARNING
    assert "fallback" in outcome.logs[-1].message
    assert is_legacy_sentinel(outcome)


def test_empty_problem_is_no_match(solver) -> None:
    assert solver.solve("").invariant_tag is None


# =============================================================================
# ORDERING
# =============================================================================


def test_first_match_wins(solver) -> None:
    problem = (
        "Quadratic polynomials P(x) and Q(x) have leading coefficients 2 and -2. "
        "They pass through (16,54) and (20,53). Let S = {1, 2} be a subset. "
        "Find P(0)+Q(0)."
    )
    # the combinatorial plugin would also claim this text on its own
    assert CombinatorialPlugin().try_solve(problem).answer == 8

    outcome = solver.solve(problem)
    assert outcome.invariant_tag is InvariantTag.POLYNOMIAL
    assert outcome.answer == 116


def test_configured_order_changes_winner(polynomial_problem) -> None:
    problem = polynomial_problem + " Let S = {1, 2} be a subset."
    solver = InvariantSolver(plugin_order=["combinatorial", "polynomial"])
    assert solver.solve(problem).invariant_tag is InvariantTag.COMBINATORIAL


def test_dispatch_is_deterministic(solver, polynomial_problem) -> None:
    first = solver.solve(polynomial_problem)
    second = solver.solve(polynomial_problem)
    assert first.answer == second.answer
    assert first.invariant_tag == second.invariant_tag
    assert first.steps == second.steps


# =============================================================================
# FAULTS AND SENTINELS
# =============================================================================


def test_fault_is_absorbed_and_recorded() -> None:
    solver = solver_with(ExplodingPlugin(), ModularPlugin())
    outcome = solver.solve("What is 3^4 mod 10?")

    assert outcome.invariant_tag is InvariantTag.MODULAR
    assert outcome.answer == 1
    assert outcome.logs[0].severity is Severity.WARNING
    assert "exploding" in outcome.logs[0].message


def test_fault_in_every_plugin_gives_no_match() -> None:
    outcome = solver_with(ExplodingPlugin()).solve("anything")
    assert outcome.invariant_tag is None
    assert outcome.answer == 0


def test_legacy_sentinel_is_skipped() -> None:
    solver = solver_with(SentinelPlugin(), ModularPlugin())
    outcome = solver.solve("What is 3^4 mod 10?")
    assert outcome.invariant_tag is InvariantTag.MODULAR


@pytest.mark.parametrize(
    "answer, tag, expected",
    [
        (0, None, True),
        (False, None, False),
        ("0", None, False),
        (0, InvariantTag.MODULAR, False),
        (None, None, False),
    ],
)
def test_is_legacy_sentinel(answer, tag, expected) -> None:
    assert is_legacy_sentinel(SolveOutcome(answer=answer, invariant_tag=tag)) is expected


def test_plugin_names_follow_registry(solver) -> None:
    assert solver.plugin_names() == solver.registry.keys()
    assert solver.modulus == 100000


def test_outcome_serialises(solver) -> None:
    data = solver.solve("What is 3^4 mod 10?").to_dict()
    assert data["answer"] == 1
    assert data["invariant_tag"] == InvariantTag.MODULAR.value
    assert all({"timestamp", "severity", "message"} <= set(log) for log in data["logs"])


def test_large_combinatorial_problem_is_not_a_fault(solver) -> None:
    outcome = solver.solve(
        "Let n = 10000. Find the sum of the sizes of the intersections of all "
        "ordered pairs of subsets."
    )
    assert outcome.invariant_tag is InvariantTag.COMBINATORIAL
    assert outcome.answer == (10000 * pow(4, 9999, 100000)) % 100000
    assert all(entry.severity is not Severity.WARNING for entry in outcome.logs)


def test_negative_polynomial_total_keeps_sign(solver) -> None:
    outcome = solver.solve(
        "Quadratic polynomials P(x) and Q(x) have leading coefficients 1 and 1. "
        "They pass through (1,-10) and (2,-10). Find P(0)+Q(0)."
    )
    assert outcome.invariant_tag is InvariantTag.POLYNOMIAL
    assert outcome.answer == -16
