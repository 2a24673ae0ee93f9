"""Outcome models for provisioning phases.

This module defines data structures for per-method results and the
per-phase counters aggregated by the outcome tracker.
"""

from dataclasses import dataclass, field
from enum import Enum


class OutcomeKind(Enum):
    """Kind of outcome recorded for an item.

    Attributes:
        SUCCESS: The desired state was reached (or already held).
        WARNING: No corrective action was attempted; state is indeterminate.
        ERROR: An attempted action failed.
    """

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Return the capitalized label used in detail strings."""
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class MethodResult:
    """Result of running one provider method for an item.

    Attributes:
        kind: Outcome kind of the method.
        message: Human-readable explanation.
    """

    kind: OutcomeKind
    message: str = ""

    @property
    def success(self) -> bool:
        """Check if the method reached the desired state."""
        return self.kind == OutcomeKind.SUCCESS

    @property
    def failed(self) -> bool:
        """Check if the method failed."""
        return self.kind == OutcomeKind.ERROR

    @classmethod
    def ok(cls, message: str = "") -> "MethodResult":
        return cls(OutcomeKind.SUCCESS, message)

    @classmethod
    def warning(cls, message: str) -> "MethodResult":
        return cls(OutcomeKind.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "MethodResult":
        return cls(OutcomeKind.ERROR, message)


@dataclass(slots=True)
class PhaseOutcome:
    """Aggregate counters for one named phase.

    Invariant: ``attempted == succeeded + failed``; warnings are not
    counted as attempts.

    Attributes:
        attempted: Number of successful or failed outcomes.
        succeeded: Number of successful outcomes.
        warned: Number of warnings.
        failed: Number of errors.
        details: Ordered outcome strings, each tagged with its kind.
    """

    attempted: int = 0
    succeeded: int = 0
    warned: int = 0
    failed: int = 0
    details: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PhaseReport:
    """Read-only view of a phase for the end-of-run summary.

    ``details`` is empty unless the summary was requested in verbose mode.
    """

    name: str
    attempted: int
    succeeded: int
    warned: int
    failed: int
    details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Summary of every phase tracked during a run."""

    phases: tuple[PhaseReport, ...] = ()

    @property
    def total_failed(self) -> int:
        """Total number of errors across all phases."""
        return sum(p.failed for p in self.phases)

    @property
    def total_warned(self) -> int:
        """Total number of warnings across all phases."""
        return sum(p.warned for p in self.phases)
