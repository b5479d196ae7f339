"""
Fallback reasoning service - boundary to a non-deterministic LLM.

Talks to an Ollama-compatible chat API.  The client never raises to its
caller: transport, HTTP and parse failures come back as an outcome with
no answer and an error-level log entry, so the result shape is the same
whichever path produced it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .base import Citation, InvariantTag, LogEntry, Severity, SolveOutcome
from .dispatcher import InvariantSolver

logger = logging.getLogger(__name__)

FAILURE_STEP = "Deduction engine failed to reach a conclusion."

SYSTEM_PROMPT = """You are a world-class theoretical mathematician.
For proofs: use a formal structure: Theorem Statement, Lemma(s), and a Step-by-Step Proof or Proof Sketch.
For competition problems: return the integer answer.
Output MUST be a JSON object with the keys:
  "answer"    - the final numerical answer, or 'Q.E.D.' followed by the theorem name
  "reasoning" - detailed reasoning and derivation path
  "steps"     - array of strings, the sequence of logical deductions
  "citations" - optional array of {"title": ..., "uri": ...} sources"""


def is_proof_request(problem: str) -> bool:
    lowered = problem.lower()
    return "prove" in lowered or "proof" in lowered


def build_prompt(problem: str) -> str:
    return (
        "Analyze and attempt to solve or prove this mathematical query.\n"
        "If it is a formal proof request, provide a structured \"Proof Sketch\" "
        "or \"Current State of Proof\" following axiomatic principles.\n"
        f"Problem/Query: {problem}"
    )


def failure_outcome(message: str) -> SolveOutcome:
    return SolveOutcome(
        answer=None,
        invariant_tag=None,
        steps=(FAILURE_STEP,),
        logs=(LogEntry.create(f"Deduction Error: {message}", Severity.ERROR),),
    )


def parse_payload(content: str, proof_request: bool = False) -> SolveOutcome:
    """Convert the model's JSON reply into a `SolveOutcome`.

    Raises ``ValueError`` when the reply is not a JSON object.
    """
    data = json.loads(content or "{}")
    if not isinstance(data, dict):
        raise ValueError("fallback reply is not a JSON object")

    answer = data.get("answer")
    if answer is None:
        answer = "N/A"
    elif not isinstance(answer, (int, str)) or isinstance(answer, bool):
        answer = str(answer)

    steps = data.get("steps") or ["Quantum fallback processed successfully."]
    citations = tuple(
        Citation(title=c.get("title") or "Mathematical Source", uri=c["uri"])
        for c in data.get("citations") or []
        if isinstance(c, dict) and c.get("uri")
    )

    message = (
        "Axiomatic proof engine engaged."
        if proof_request
        else "Fallback reasoning resolved high-level query."
    )
    return SolveOutcome(
        answer=answer,
        invariant_tag=InvariantTag.QUANTUM_FALLBACK,
        steps=tuple(str(s) for s in steps),
        logs=(LogEntry.create(message, Severity.SUCCESS),),
        reasoning=data.get("reasoning"),
        citations=citations,
    )


class FallbackClient:
    """Async client for the fallback reasoning service."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else self.timeout,
            transport=self._transport,
        )

    async def status(self) -> Dict[str, Any]:
        """Check if the service is running and list its models."""
        try:
            async with self._client(timeout=5.0) as client:
                response = await client.get("/api/tags")
                if response.status_code == 200:
                    models = [m["name"] for m in response.json().get("models", [])]
                    return {
                        "status": "online",
                        "models": models,
                        "default_model": self.model,
                    }
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.warning(f"Fallback status check failed: {e}")

        return {
            "status": "offline",
            "models": [],
            "default_model": None,
            "error": "Fallback service is not reachable. Start it with: ollama serve",
        }

    def build_request(
        self,
        problem: str,
        high_reasoning: bool = False,
        image_b64: Optional[str] = None,
    ) -> Dict[str, Any]:
        user_message: Dict[str, Any] = {"role": "user", "content": build_prompt(problem)}
        if image_b64:
            user_message["images"] = [image_b64]

        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            user_message,
        ]
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "format": "json",
            "stream": False,
        }
        if high_reasoning or is_proof_request(problem):
            payload["think"] = True
        return payload

    async def query(
        self,
        problem: str,
        high_reasoning: bool = False,
        image_b64: Optional[str] = None,
    ) -> SolveOutcome:
        payload = self.build_request(problem, high_reasoning, image_b64)
        try:
            async with self._client() as client:
                response = await client.post("/api/chat", json=payload)
            if response.status_code != 200:
                return failure_outcome(f"HTTP {response.status_code}: {response.text[:200]}")
            content = response.json().get("message", {}).get("content", "")
            return parse_payload(content, proof_request=is_proof_request(problem))
        except httpx.TimeoutException:
            logger.warning("Fallback request timed out")
            return failure_outcome("request timed out")
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Fallback request failed: %s", e)
            return failure_outcome(str(e) or type(e).__name__)


async def solve_with_fallback(
    solver: InvariantSolver,
    problem: str,
    client: Optional[FallbackClient] = None,
    high_reasoning: bool = False,
    image_b64: Optional[str] = None,
) -> SolveOutcome:
    """Deterministic engine first, fallback only on no match.

    An attached image skips the deterministic engine: only the fallback
    reads images.
    """
    trail: List[LogEntry] = []

    if not image_b64:
        outcome = solver.solve(problem)
        if outcome.is_match or client is None:
            return outcome
        trail.extend(outcome.logs)
    else:
        trail.append(LogEntry.create("Visual context attached; routing to fallback."))

    if client is None:
        return failure_outcome("no fallback reasoning service configured").with_logs(before=trail)

    result = await client.query(problem, high_reasoning=high_reasoning, image_b64=image_b64)
    return result.with_logs(before=trail)
