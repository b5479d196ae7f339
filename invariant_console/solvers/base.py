"""
Base classes for the invariant plugin system.

Every invariant recognizer is described by an `InvariantPlugin` subclass
that knows:
  - metadata (key, name, invariant tag, trigger phrases)
  - how to decide whether a problem statement is its kind of problem
  - how to derive the closed-form answer and a step trace
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_MODULUS = 100000

Answer = Union[int, str, None]


# ────────────────────────────────────────────────────────
# Data classes
# ────────────────────────────────────────────────────────

class InvariantTag(str, Enum):
    POLYNOMIAL = "Polynomial (Linear Reduction)"
    DIOPHANTINE = "Diophantine (Frobenius)"
    COMBINATORIAL = "Combinatorial (Subset S_n)"
    NUMBER_THEORY = "Eulerian Number Theory (Totient/Lucas)"
    ROOT_DYNAMICS = "Root Dynamics (Newton Sums)"
    SEQUENCES = "Sequence Analysis (Arithmetic/Geometric)"
    FUNCTIONAL_EQUATION = "Functional Equation (Cauchy/Shifted)"
    SPECTRAL_ZETA = "Spectral Zeta Analysis (Riemann/Euler Score)"
    REPEATING_DECIMAL = "Repeating Decimal"
    MODULAR = "Modular Arithmetic"
    GEOMETRIC = "Geometric"
    QUANTUM_FALLBACK = "Quantum Fallback (AI)"
    LIVE_TRANSCRIPTION = "Live Voice Sync"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    severity: Severity
    message: str

    @classmethod
    def create(cls, message: str, severity: Severity = Severity.INFO) -> "LogEntry":
        return cls(
            timestamp=datetime.now().strftime("%H:%M:%S"),
            severity=severity,
            message=message,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "timestamp": self.timestamp,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class Citation:
    title: str
    uri: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "uri": self.uri}


@dataclass(frozen=True)
class SolveOutcome:
    """Result of one solve attempt - returned by plugins, the dispatcher
    and the fallback client alike."""
    answer: Answer
    invariant_tag: Optional[InvariantTag]
    steps: Tuple[str, ...] = ()
    logs: Tuple[LogEntry, ...] = ()
    reasoning: Optional[str] = None
    citations: Tuple[Citation, ...] = ()

    @property
    def is_match(self) -> bool:
        return self.invariant_tag is not None

    def with_logs(
        self,
        before: Sequence[LogEntry] = (),
        after: Sequence[LogEntry] = (),
    ) -> "SolveOutcome":
        """Return a copy whose log trail is ``before + logs + after``."""
        return replace(self, logs=tuple(before) + self.logs + tuple(after))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "answer": self.answer,
            "invariant_tag": self.invariant_tag.value if self.invariant_tag else None,
            "steps": list(self.steps),
            "logs": [entry.to_dict() for entry in self.logs],
            "reasoning": self.reasoning,
            "citations": [c.to_dict() for c in self.citations],
        }


class AttemptStatus(str, Enum):
    SOLVED = "solved"
    NO_MATCH = "no_match"
    FAULT = "fault"


@dataclass(frozen=True)
class PluginAttempt:
    """Explicit outcome of running one plugin against one problem."""
    plugin_key: str
    status: AttemptStatus
    outcome: Optional[SolveOutcome] = None
    error: str = ""


@dataclass
class PluginInfo:
    """Serialisable snapshot of a plugin - returned by the API."""
    position: int
    key: str
    name: str
    tag: str
    description: str
    triggers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "key": self.key,
            "name": self.name,
            "tag": self.tag,
            "description": self.description,
            "triggers": list(self.triggers),
        }


# ────────────────────────────────────────────────────────
# Abstract base plugin
# ────────────────────────────────────────────────────────

class InvariantPlugin(ABC):
    """
    Abstract base class for an invariant plugin.

    Subclass this and implement the abstract members to add a new
    invariant to the engine.  Place the file under
    ``invariant_console/solvers/plugins/`` and it will be auto-discovered;
    its dispatch position comes from the configured plugin order.
    """

    def __init__(self, modulus: int = DEFAULT_MODULUS) -> None:
        self.modulus = modulus

    # ── metadata (must override) ────────────────────────

    @property
    @abstractmethod
    def key(self) -> str:
        """Unique lowercase identifier, e.g. 'diophantine'."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'Diophantine (Frobenius)'."""
        ...

    @property
    @abstractmethod
    def tag(self) -> InvariantTag:
        ...

    @property
    def description(self) -> str:
        return ""

    @property
    def triggers(self) -> List[str]:
        """Lowercase phrases that route a problem to this plugin."""
        return []

    # ── solving ─────────────────────────────────────────

    @abstractmethod
    def try_solve(self, problem: str) -> Optional[SolveOutcome]:
        """
        Return an outcome, or ``None`` when the problem is not this
        plugin's kind.  Raising is reserved for internal arithmetic or
        parse failures.
        """
        ...

    def attempt(self, problem: str) -> PluginAttempt:
        """Run `try_solve` and fold every result into a `PluginAttempt`."""
        try:
            outcome = self.try_solve(problem)
        except Exception as exc:
            logger.warning("Plugin %s faulted: %s", self.key, exc)
            return PluginAttempt(
                plugin_key=self.key,
                status=AttemptStatus.FAULT,
                error=f"{type(exc).__name__}: {exc}",
            )

        if outcome is None:
            return PluginAttempt(plugin_key=self.key, status=AttemptStatus.NO_MATCH)
        return PluginAttempt(plugin_key=self.key, status=AttemptStatus.SOLVED, outcome=outcome)

    # ── helpers for subclasses ──────────────────────────

    def mentions_any(self, text: str, phrases: Optional[Iterable[str]] = None) -> bool:
        """Case-insensitive substring trigger check."""
        lowered = text.lower()
        return any(p in lowered for p in (self.triggers if phrases is None else phrases))

    @staticmethod
    def find_integers(text: str) -> List[int]:
        return [int(tok) for tok in re.findall(r"\b\d+\b", text)]

    @staticmethod
    def gcd(a: int, b: int) -> int:
        return math.gcd(a, b)

    @staticmethod
    def mod_pow(base: int, exponent: int, modulus: int) -> int:
        """Binary square-and-multiply."""
        result = 1
        base %= modulus
        while exponent > 0:
            if exponent & 1:
                result = (result * base) % modulus
            base = (base * base) % modulus
            exponent >>= 1
        return result % modulus

    @staticmethod
    def log(message: str, severity: Severity = Severity.INFO) -> LogEntry:
        return LogEntry.create(message, severity)

    def _outcome(
        self,
        answer: Answer,
        steps: Sequence[str],
        logs: Sequence[LogEntry],
    ) -> SolveOutcome:
        return SolveOutcome(
            answer=answer,
            invariant_tag=self.tag,
            steps=tuple(steps),
            logs=tuple(logs),
        )

    # ── serialisation ───────────────────────────────────

    def to_info(self, position: int) -> PluginInfo:
        """Build a PluginInfo snapshot for the API."""
        return PluginInfo(
            position=position,
            key=self.key,
            name=self.name,
            tag=self.tag.value,
            description=self.description,
            triggers=self.triggers,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key!r}>"
