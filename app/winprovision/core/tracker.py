"""Per-phase outcome bookkeeping.

The OutcomeTracker is an explicit state object passed to every phase
function. It is pure bookkeeping and never raises.
"""

import logging

from winprovision.models.outcome import OutcomeKind, PhaseOutcome, PhaseReport, RunSummary

logger = logging.getLogger(__name__)


class OutcomeTracker:
    """Collects success/warning/error counts and details per phase.

    Invariant for every phase: ``attempted == succeeded + failed``.
    Warnings are counted separately and are not attempts.

    Example:
        >>> tracker = OutcomeTracker()
        >>> tracker.initialize_phase("apps")
        >>> tracker.record("apps", OutcomeKind.SUCCESS, detail="VSCode installed")
        >>> tracker.get("apps").succeeded
        1
    """

    def __init__(self) -> None:
        self._phases: dict[str, PhaseOutcome] = {}

    def initialize_phase(self, name: str) -> None:
        """Create or reset the counters for a phase.

        Calling this twice discards the earlier counts.

        Args:
            name: Phase name.
        """
        self._phases[name] = PhaseOutcome()

    def is_initialized(self, name: str) -> bool:
        """Check whether a phase has been initialized."""
        return name in self._phases

    def record(
        self,
        phase: str,
        kind: OutcomeKind,
        amount: int = 1,
        detail: str | None = None,
    ) -> None:
        """Record an outcome for a phase.

        Unknown phases are initialized implicitly.

        Args:
            phase: Phase name.
            kind: Outcome kind.
            amount: How many outcomes to count; negative values count as 0.
            detail: Optional human-readable detail, stored as "[Kind] detail".
        """
        if not self.is_initialized(phase):
            logger.debug("Phase '%s' recorded before initialization; initializing", phase)
            self.initialize_phase(phase)

        outcome = self._phases[phase]
        amount = max(amount, 0)

        if kind == OutcomeKind.SUCCESS:
            outcome.succeeded += amount
            outcome.attempted += amount
        elif kind == OutcomeKind.ERROR:
            outcome.failed += amount
            outcome.attempted += amount
        else:
            outcome.warned += amount

        if detail:
            outcome.details.append(f"[{kind.label}] {detail}")

    def success(self, phase: str, detail: str | None = None) -> None:
        """Record a single success."""
        self.record(phase, OutcomeKind.SUCCESS, detail=detail)

    def warning(self, phase: str, detail: str | None = None) -> None:
        """Record a single warning."""
        self.record(phase, OutcomeKind.WARNING, detail=detail)

    def error(self, phase: str, detail: str | None = None) -> None:
        """Record a single error."""
        self.record(phase, OutcomeKind.ERROR, detail=detail)

    def get(self, phase: str) -> PhaseOutcome | None:
        """Return the live counters of a phase, or None if unknown."""
        return self._phases.get(phase)

    @property
    def phases(self) -> list[str]:
        """Phase names in the order they were first seen."""
        return list(self._phases)

    @property
    def has_errors(self) -> bool:
        """Check if any phase recorded an error."""
        return any(outcome.failed for outcome in self._phases.values())

    def summarize(self, verbose: bool = False) -> RunSummary:
        """Build the end-of-run summary.

        Args:
            verbose: Include the detail lines of each phase.

        Returns:
            RunSummary with one PhaseReport per phase.
        """
        return RunSummary(
            phases=tuple(
                PhaseReport(
                    name=name,
                    attempted=outcome.attempted,
                    succeeded=outcome.succeeded,
                    warned=outcome.warned,
                    failed=outcome.failed,
                    details=tuple(outcome.details) if verbose else (),
                )
                for name, outcome in self._phases.items()
            )
        )
