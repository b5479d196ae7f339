"""
Diagnostics: regression harness and the reference benchmark.
"""

from .benchmark import ReferenceProblem, load_reference_problems, run_reference_benchmark
from .harness import (
    DEFAULT_CASES,
    CaseFailure,
    CaseResult,
    DiagnosticCase,
    DiagnosticReport,
    run_case,
    run_diagnostics,
)

__all__ = [
    "DEFAULT_CASES",
    "CaseFailure",
    "CaseResult",
    "DiagnosticCase",
    "DiagnosticReport",
    "ReferenceProblem",
    "load_reference_problems",
    "run_case",
    "run_diagnostics",
    "run_reference_benchmark",
]
