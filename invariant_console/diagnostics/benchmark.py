"""
Reference Benchmark - runs the olympiad reference catalogue through the solver
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from ..solvers.dispatcher import InvariantSolver

logger = logging.getLogger(__name__)

DEFAULT_CATALOGUE = Path(__file__).resolve().parent.parent / "data" / "reference_problems.yaml"


@dataclass(frozen=True)
class ReferenceProblem:
    id: int
    title: str
    problem: str
    expected_answer: int


def load_reference_problems(path: Optional[str] = None) -> List[ReferenceProblem]:
    """
    Load the reference catalogue from YAML

    Args:
        path: Catalogue file; the packaged catalogue when None

    Returns:
        Problems sorted by id
    """
    catalogue = Path(path) if path else DEFAULT_CATALOGUE
    with open(catalogue, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    problems = [
        ReferenceProblem(
            id=int(entry['id']),
            title=str(entry['title']),
            problem=str(entry['problem']).strip(),
            expected_answer=int(entry['expected_answer']),
        )
        for entry in data.get('problems', [])
    ]
    logger.info(f"Loaded {len(problems)} reference problems from {catalogue}")
    return sorted(problems, key=lambda p: p.id)


def _evaluate(solver: InvariantSolver, problem: ReferenceProblem) -> Dict[str, Any]:
    outcome = solver.solve(problem.problem)
    tag = outcome.invariant_tag
    return {
        'id': problem.id,
        'title': problem.title,
        'expected': problem.expected_answer,
        'answer': outcome.answer,
        'tag': tag.value if tag is not None else None,
        'resolved': outcome.is_match,
        'correct': outcome.is_match and outcome.answer == problem.expected_answer,
    }


def run_reference_benchmark(
    solver: InvariantSolver,
    problems: Sequence[ReferenceProblem],
    max_workers: int = 4,
) -> Dict[str, Any]:
    """
    Solve every reference problem concurrently

    Returns:
        Dictionary with per-problem results (ordered by id) and counts
    """
    results: List[Dict[str, Any]] = []
    errors: List[Dict[str, Any]] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(_evaluate, solver, p): p
            for p in problems
        }

        for future in as_completed(futures):
            problem = futures[future]
            try:
                results.append(future.result())
            except Exception as e:
                errors.append({'id': problem.id, 'error': str(e)})
                logger.error(f"Reference problem {problem.id} failed: {e}")

    results.sort(key=lambda r: r['id'])
    summary = {
        'total': len(problems),
        'resolved': sum(1 for r in results if r['resolved']),
        'correct': sum(1 for r in results if r['correct']),
        'unresolved': sum(1 for r in results if not r['resolved']),
        'errors': errors,
        'results': results,
    }
    logger.info(
        f"Reference benchmark: {summary['resolved']}/{summary['total']} resolved "
        f"deterministically, {summary['correct']} correct"
    )
    return summary
