"""Unit tests for OutcomeTracker.

Tests for per-phase counters, detail lines and summaries.
"""

import pytest

from winprovision.core.tracker import OutcomeTracker
from winprovision.models.outcome import OutcomeKind


class TestOutcomeTracker:
    """Tests for OutcomeTracker class."""

    def test_initialize_phase(self, tracker: OutcomeTracker) -> None:
        """A new phase starts at zero."""
        tracker.initialize_phase("apps")
        outcome = tracker.get("apps")

        assert outcome is not None
        assert (outcome.attempted, outcome.succeeded, outcome.warned, outcome.failed) == (0, 0, 0, 0)
        assert outcome.details == []

    def test_initialize_resets(self, tracker: OutcomeTracker) -> None:
        """Initializing twice discards earlier counts."""
        tracker.initialize_phase("apps")
        tracker.success("apps", "one")
        tracker.initialize_phase("apps")

        outcome = tracker.get("apps")
        assert outcome is not None
        assert outcome.succeeded == 0
        assert outcome.details == []

    def test_implicit_initialization(self, tracker: OutcomeTracker) -> None:
        """Recording into an unknown phase creates it."""
        assert tracker.is_initialized("fonts") is False
        tracker.error("fonts", "boom")

        assert tracker.is_initialized("fonts") is True
        outcome = tracker.get("fonts")
        assert outcome is not None
        assert outcome.failed == 1
        assert outcome.attempted == 1

    def test_warnings_are_not_attempts(self, tracker: OutcomeTracker) -> None:
        """Warnings increment only the warning counter."""
        tracker.warning("apps", "skipped")
        outcome = tracker.get("apps")

        assert outcome is not None
        assert outcome.warned == 1
        assert outcome.attempted == 0

    def test_counter_invariant(self, tracker: OutcomeTracker) -> None:
        """attempted always equals succeeded plus failed."""
        sequence = [
            OutcomeKind.SUCCESS,
            OutcomeKind.WARNING,
            OutcomeKind.ERROR,
            OutcomeKind.SUCCESS,
            OutcomeKind.WARNING,
            OutcomeKind.ERROR,
            OutcomeKind.ERROR,
        ]
        tracker.initialize_phase("apps")
        for kind in sequence:
            tracker.record("apps", kind)
            outcome = tracker.get("apps")
            assert outcome is not None
            assert outcome.attempted == outcome.succeeded + outcome.failed

        outcome = tracker.get("apps")
        assert outcome is not None
        assert (outcome.succeeded, outcome.warned, outcome.failed) == (2, 2, 3)

    def test_record_amount(self, tracker: OutcomeTracker) -> None:
        """Amounts above one count several outcomes; negatives count as zero."""
        tracker.record("apps", OutcomeKind.SUCCESS, amount=3)
        tracker.record("apps", OutcomeKind.ERROR, amount=-2)
        outcome = tracker.get("apps")

        assert outcome is not None
        assert outcome.succeeded == 3
        assert outcome.failed == 0
        assert outcome.attempted == 3

    def test_details_are_tagged(self, tracker: OutcomeTracker) -> None:
        """Details are stored with their kind label, in order."""
        tracker.success("apps", "VSCode installed")
        tracker.warning("apps", "Tool skipped")
        tracker.error("apps", "Git failed")
        tracker.success("apps")

        outcome = tracker.get("apps")
        assert outcome is not None
        assert outcome.details == [
            "[Success] VSCode installed",
            "[Warning] Tool skipped",
            "[Error] Git failed",
        ]

    def test_phases_keep_order(self, tracker: OutcomeTracker) -> None:
        """Phases are listed in first-seen order."""
        tracker.initialize_phase("debloat")
        tracker.success("apps")
        tracker.initialize_phase("fonts")
        assert tracker.phases == ["debloat", "apps", "fonts"]

    def test_has_errors(self, tracker: OutcomeTracker) -> None:
        """has_errors ignores warnings."""
        tracker.warning("apps", "skipped")
        assert tracker.has_errors is False
        tracker.error("apps", "failed")
        assert tracker.has_errors is True

    @pytest.mark.parametrize("verbose", [True, False])
    def test_summarize(self, tracker: OutcomeTracker, verbose: bool) -> None:
        """Details are included only in verbose summaries."""
        tracker.success("apps", "ok")
        tracker.error("debloat", "failed")

        summary = tracker.summarize(verbose=verbose)

        assert [p.name for p in summary.phases] == ["apps", "debloat"]
        assert summary.total_failed == 1
        assert bool(summary.phases[0].details) is verbose

    def test_get_unknown_phase(self, tracker: OutcomeTracker) -> None:
        """get() returns None for unknown phases."""
        assert tracker.get("missing") is None
