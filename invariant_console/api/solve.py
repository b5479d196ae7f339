"""
Solve API endpoints
Routes a problem through the deterministic engine and, when nothing
matches, optionally through the fallback reasoning service.
"""

from fastapi import APIRouter, Request, HTTPException
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
import logging

from ..solvers.base import InvariantTag, SolveOutcome
from ..solvers.fallback import solve_with_fallback

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== SCHEMAS ====================

class SolveRequest(BaseModel):
    """Problem submitted to the console"""
    problem: str = Field("", description="Natural-language problem statement")
    high_reasoning: bool = Field(False, description="Request extended reasoning from the fallback")
    image_base64: Optional[str] = Field(None, description="Base64 image forwarded to the fallback")
    allow_fallback: bool = Field(True, description="Escalate to the fallback when nothing matches")


# ==================== HELPERS ====================

def outcome_source(outcome: SolveOutcome) -> str:
    """Which path produced the outcome: deterministic, fallback or none"""
    if outcome.invariant_tag is None:
        return "none"
    if outcome.invariant_tag == InvariantTag.QUANTUM_FALLBACK:
        return "fallback"
    return "deterministic"


# ==================== ENDPOINTS ====================

@router.post("")
async def solve_problem(body: SolveRequest, request: Request) -> Dict[str, Any]:
    """Solve a problem, deterministic engine first"""
    problem = body.problem.strip()
    if not problem and not body.image_base64:
        raise HTTPException(status_code=400, detail="Problem text or an image is required")

    solver = request.app.state.solver
    fallback = request.app.state.fallback if body.allow_fallback else None

    if fallback is None and not body.image_base64:
        outcome = solver.solve(problem)
    else:
        outcome = await solve_with_fallback(
            solver,
            problem,
            client=fallback,
            high_reasoning=body.high_reasoning,
            image_b64=body.image_base64,
        )

    source = outcome_source(outcome)
    logger.info(f"Solved via {source}: answer={outcome.answer!r}")
    return {**outcome.to_dict(), "source": source}


@router.get("/fallback-status")
async def get_fallback_status(request: Request) -> Dict[str, Any]:
    """Check that the fallback reasoning service is reachable"""
    fallback = request.app.state.fallback
    if fallback is None:
        return {
            "status": "disabled",
            "models": [],
            "default_model": None,
        }
    return await fallback.status()
