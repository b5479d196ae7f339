"""
Tests for the fallback reasoning client and the escalation path

The service is replaced with ``httpx.MockTransport`` so nothing leaves
the process.
"""

import json

import httpx
import pytest

from invariant_console.solvers.base import InvariantTag, Severity
from invariant_console.solvers.fallback import (
    FAILURE_STEP,
    FallbackClient,
    build_prompt,
    is_proof_request,
    parse_payload,
    solve_with_fallback,
)


def chat_reply(payload) -> httpx.Response:
    return httpx.Response(200, json={"message": {"role": "assistant", "content": json.dumps(payload)}})


class RecordingService:
    """Mock transport handler that records every request it receives."""

    def __init__(self, reply=None):
        self.requests = []
        self.reply = reply or chat_reply({
            "answer": 42,
            "reasoning": "By inspection.",
            "steps": ["Observe", "Conclude"],
            "citations": [
                {"title": "Ref", "uri": "https://example.org/ref"},
                {"title": "No link"},
            ],
        })

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/tags":
            return httpx.Response(200, json={"models": [{"name": "llama3.2"}, {"name": "qwen3"}]})
        return self.reply

    def payloads(self):
        return [json.loads(r.content) for r in self.requests if r.url.path == "/api/chat"]


def make_client(handler) -> FallbackClient:
    return FallbackClient(base_url="http://fallback.test", transport=httpx.MockTransport(handler))


# =============================================================================
# PAYLOAD PARSING
# =============================================================================


class TestParsePayload:

    def test_full_reply(self) -> None:
        outcome = parse_payload(json.dumps({
            "answer": "Q.E.D. Fermat",
            "reasoning": "r",
            "steps": ["a", "b"],
            "citations": [{"uri": "https://x.test"}],
        }))
        assert outcome.answer == "Q.E.D. Fermat"
        assert outcome.invariant_tag is InvariantTag.QUANTUM_FALLBACK
        assert outcome.steps == ("a", "b")
        assert outcome.reasoning == "r"
        assert outcome.citations[0].title == "Mathematical Source"

    def test_missing_answer_becomes_na(self) -> None:
        assert parse_payload("{}").answer == "N/A"

    def test_non_integer_answer_is_stringified(self) -> None:
        assert parse_payload('{"answer": 3.5}').answer == "3.5"

    def test_default_step(self) -> None:
        assert parse_payload('{"answer": 1}').steps

    def test_proof_request_log(self) -> None:
        outcome = parse_payload('{"answer": "Q.E.D."}', proof_request=True)
        assert "proof" in outcome.logs[0].message.lower()

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValueError):
            parse_payload("[1, 2]")


def test_proof_detection() -> None:
    assert is_proof_request("Prove that there are infinitely many primes")
    assert is_proof_request("Give a proof sketch")
    assert not is_proof_request("Compute 2 + 2")


def test_prompt_embeds_problem() -> None:
    assert "Problem/Query: Compute 2 + 2" in build_prompt("Compute 2 + 2")


# =============================================================================
# CLIENT
# =============================================================================


class TestFallbackClient:

    async def test_query_success(self) -> None:
        service = RecordingService()
        outcome = await make_client(service).query("Some hard problem")

        assert outcome.answer == 42
        assert outcome.invariant_tag is InvariantTag.QUANTUM_FALLBACK
        assert outcome.steps == ("Observe", "Conclude")
        assert [c.uri for c in outcome.citations] == ["https://example.org/ref"]

        payload = service.payloads()[0]
        assert payload["model"] == "llama3.2"
        assert payload["format"] == "json"
        assert payload["stream"] is False
        assert payload["messages"][0]["role"] == "system"
        assert "think" not in payload

    async def test_high_reasoning_enables_thinking(self) -> None:
        service = RecordingService()
        await make_client(service).query("Some hard problem", high_reasoning=True)
        assert service.payloads()[0]["think"] is True

    async def test_proof_request_enables_thinking(self) -> None:
        service = RecordingService()
        await make_client(service).query("Prove that sqrt(2) is irrational")
        assert service.payloads()[0]["think"] is True

    async def test_image_attached_to_user_message(self) -> None:
        service = RecordingService()
        await make_client(service).query("What is shown?", image_b64="aGVsbG8=")
        user = service.payloads()[0]["messages"][1]
        assert user["role"] == "user"
        assert user["images"] == ["aGVsbG8="]

    async def test_http_error_becomes_failure_outcome(self) -> None:
        service = RecordingService(reply=httpx.Response(500, text="model crashed"))
        outcome = await make_client(service).query("Some hard problem")

        assert outcome.answer is None
        assert outcome.invariant_tag is None
        assert outcome.steps == (FAILURE_STEP,)
        assert outcome.logs[0].severity is Severity.ERROR
        assert "HTTP 500" in outcome.logs[0].message

    async def test_invalid_json_becomes_failure_outcome(self) -> None:
        reply = httpx.Response(200, json={"message": {"content": "not json at all"}})
        outcome = await make_client(RecordingService(reply=reply)).query("Some hard problem")
        assert outcome.answer is None
        assert outcome.steps == (FAILURE_STEP,)

    async def test_timeout_becomes_failure_outcome(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        outcome = await make_client(handler).query("Some hard problem")
        assert outcome.answer is None
        assert "timed out" in outcome.logs[0].message

    async def test_connection_error_becomes_failure_outcome(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        outcome = await make_client(handler).query("Some hard problem")
        assert outcome.answer is None
        assert outcome.logs[0].severity is Severity.ERROR

    async def test_status_online(self) -> None:
        status = await make_client(RecordingService()).status()
        assert status["status"] == "online"
        assert status["models"] == ["llama3.2", "qwen3"]

    async def test_status_offline(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        status = await make_client(handler).status()
        assert status["status"] == "offline"
        assert status["models"] == []


# =============================================================================
# ESCALATION
# =============================================================================


class TestSolveWithFallback:

    async def test_deterministic_match_skips_service(self, solver) -> None:
        service = RecordingService()
        outcome = await solve_with_fallback(solver, "What is 3^4 mod 10?", make_client(service))
        assert outcome.invariant_tag is InvariantTag.MODULAR
        assert service.requests == []

    async def test_no_match_escalates_and_merges_logs(self, solver) -> None:
        service = RecordingService()
        outcome = await solve_with_fallback(
            solver, "How many apples are in the basket?", make_client(service)
        )
        assert outcome.invariant_tag is InvariantTag.QUANTUM_FALLBACK
        assert outcome.answer == 42
        assert len(service.payloads()) == 1
        severities = [entry.severity for entry in outcome.logs]
        assert severities[0] is Severity.WARNING
        assert severities[-1] is Severity.SUCCESS

    async def test_image_skips_deterministic_engine(self, solver) -> None:
        service = RecordingService()
        outcome = await solve_with_fallback(
            solver, "What is 3^4 mod 10?", make_client(service), image_b64="aGVsbG8="
        )
        assert outcome.invariant_tag is InvariantTag.QUANTUM_FALLBACK
        assert "Visual context" in outcome.logs[0].message
        assert service.payloads()[0]["messages"][1]["images"] == ["aGVsbG8="]

    async def test_without_client_returns_sentinel(self, solver) -> None:
        outcome = await solve_with_fallback(solver, "How many apples are in the basket?")
        assert outcome.invariant_tag is None
        assert outcome.answer == 0

    async def test_image_without_client_is_failure(self, solver) -> None:
        outcome = await solve_with_fallback(solver, "", image_b64="aGVsbG8=")
        assert outcome.answer is None
        assert outcome.steps == (FAILURE_STEP,)
