"""Command-line entry point.

Usage:
    python -m invariant_console solve "What is 3^4 mod 10?"
    python -m invariant_console solve "Prove that ..." --fallback --high-reasoning
    python -m invariant_console diagnostics
    python -m invariant_console plugins
    python -m invariant_console benchmark
    python -m invariant_console serve
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .core.config import settings
from .diagnostics.benchmark import load_reference_problems, run_reference_benchmark
from .diagnostics.harness import run_diagnostics
from .solvers.dispatcher import InvariantSolver
from .solvers.fallback import FallbackClient, solve_with_fallback


def build_solver() -> InvariantSolver:
    return InvariantSolver(modulus=settings.MODULUS, plugin_order=settings.PLUGIN_ORDER)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_solve(args: argparse.Namespace) -> int:
    solver = build_solver()
    if args.fallback and settings.FALLBACK_ENABLED:
        client = FallbackClient(
            base_url=settings.OLLAMA_HOST,
            model=settings.FALLBACK_MODEL,
            timeout=settings.FALLBACK_TIMEOUT,
        )
        outcome = asyncio.run(
            solve_with_fallback(solver, args.problem, client, high_reasoning=args.high_reasoning)
        )
    else:
        outcome = solver.solve(args.problem)
    _print_json(outcome.to_dict())
    return 0


def cmd_diagnostics(args: argparse.Namespace) -> int:
    report = run_diagnostics(build_solver())
    for result in report.results:
        mark = "PASS" if result.status == "passed" else "FAIL"
        line = f"[{mark}] {result.name} ({result.duration_ms:.2f} ms)"
        if result.error:
            line += f" - {result.error}"
        print(line)
    print(f"{report.pass_count}/{report.total_count} invariants validated")
    return 0 if report.all_passed else 1


def cmd_plugins(args: argparse.Namespace) -> int:
    for info in build_solver().registry.list_plugins():
        print(f"{info.position:>2}. {info.key:<20} {info.tag}")
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    problems = load_reference_problems(args.catalogue or settings.REFERENCE_PROBLEMS_PATH)
    _print_json(run_reference_benchmark(build_solver(), problems, max_workers=args.workers))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "invariant_console.main:app",
        host=args.host or settings.API_HOST,
        port=args.port or settings.API_PORT,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invariant_console",
        description="Deterministic invariant-matching problem solver",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="Solve one problem")
    p.add_argument("problem", help="Problem statement")
    p.add_argument("--fallback", action="store_true",
                   help="Escalate to the fallback reasoning service when nothing matches")
    p.add_argument("--high-reasoning", action="store_true",
                   help="Request extended reasoning from the fallback")
    p.set_defaults(func=cmd_solve)

    p = sub.add_parser("diagnostics", help="Run the regression battery")
    p.set_defaults(func=cmd_diagnostics)

    p = sub.add_parser("plugins", help="List plugins in dispatch order")
    p.set_defaults(func=cmd_plugins)

    p = sub.add_parser("benchmark", help="Run the reference problem catalogue")
    p.add_argument("--catalogue", default=None, help="YAML catalogue path")
    p.add_argument("--workers", type=int, default=4, help="Worker threads")
    p.set_defaults(func=cmd_benchmark)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
