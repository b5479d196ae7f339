"""
Diagnostics API endpoints
"""

from fastapi import APIRouter, Request
from typing import Dict, Any

from ..diagnostics.benchmark import load_reference_problems, run_reference_benchmark
from ..diagnostics.harness import run_diagnostics

router = APIRouter()


@router.get("")
def get_diagnostics(request: Request) -> Dict[str, Any]:
    """Run the regression battery against the live solver"""
    report = run_diagnostics(request.app.state.solver)
    return report.to_dict()


@router.get("/benchmark")
def get_reference_benchmark(request: Request) -> Dict[str, Any]:
    """Run the olympiad reference catalogue (deterministic engine only)"""
    problems = load_reference_problems(request.app.state.settings.REFERENCE_PROBLEMS_PATH)
    return run_reference_benchmark(request.app.state.solver, problems)
