"""Unit tests for ResolutionEngine.

Tests for probing, the install cascade and outcome recording.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from winprovision.core.cascade import Method
from winprovision.core.engine import APPS_PHASE, ResolutionEngine
from winprovision.core.tracker import OutcomeTracker
from winprovision.installers.winget import StoreInstaller, WingetInstaller
from winprovision.models.item import Item, LocationPolicy, Provider
from winprovision.models.outcome import MethodResult, OutcomeKind
from winprovision.utils.shell import CommandResult

OK = CommandResult(stdout="Successfully installed", stderr="", returncode=0)
FAILED = CommandResult(stdout="No package found matching input criteria.", stderr="", returncode=1)


def _probe(installed: bool) -> MagicMock:
    probe = MagicMock()
    probe.is_installed.return_value = installed
    return probe


def _engine(tracker: OutcomeTracker, installed: bool, installer: object) -> ResolutionEngine:
    return ResolutionEngine(
        tracker,
        probe_factory=lambda provider: _probe(installed),
        installer_factory=lambda provider: installer,
    )


@pytest.fixture(autouse=True)
def plain_executables():
    """Resolve executables to their bare names."""
    with patch("winprovision.installers.winget.resolve_executable", side_effect=lambda name: name):
        yield


class TestResolve:
    """Tests for ResolutionEngine.resolve."""

    def test_installs_missing_item(self, tracker: OutcomeTracker, vscode_item: Item) -> None:
        """A missing winget item is installed once and counted."""
        tracker.initialize_phase(APPS_PHASE)
        engine = _engine(tracker, installed=False, installer=WingetInstaller())

        with patch("winprovision.installers.winget.run_command", return_value=OK) as mock_run:
            kind = engine.resolve(vscode_item)

        assert kind == OutcomeKind.SUCCESS
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert (outcome.attempted, outcome.succeeded, outcome.failed) == (1, 1, 0)

        mock_run.assert_called_once()
        args = mock_run.call_args[0][0]
        assert args[:5] == ["winget", "install", "--id", "Microsoft.VisualStudioCode", "--exact"]
        assert "--silent" in args
        assert "--location" not in args
        assert "--source" not in args

    def test_already_installed_runs_nothing(
        self, tracker: OutcomeTracker, vscode_item: Item
    ) -> None:
        """An installed item is a success with zero install calls."""
        installer = MagicMock()
        engine = _engine(tracker, installed=True, installer=installer)

        for _ in range(2):
            assert engine.resolve(vscode_item) == OutcomeKind.SUCCESS

        installer.methods.assert_not_called()
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert outcome.succeeded == 2
        assert outcome.failed == 0
        assert "already installed" in outcome.details[0]

    def test_failed_install_is_error(self, tracker: OutcomeTracker, vscode_item: Item) -> None:
        """A nonzero exit is recorded as an error with the reason."""
        engine = _engine(tracker, installed=False, installer=WingetInstaller())

        with patch("winprovision.installers.winget.run_command", return_value=FAILED):
            kind = engine.resolve(vscode_item)

        assert kind == OutcomeKind.ERROR
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert outcome.failed == 1
        assert "No package found" in outcome.details[0]

    def test_warning_result(self, tracker: OutcomeTracker, vscode_item: Item) -> None:
        """A warning result is recorded as a warning, not an attempt."""
        installer = MagicMock()
        installer.methods.return_value = [
            Method("manual", lambda item: MethodResult.warning("Unsupported installer type"))
        ]
        engine = _engine(tracker, installed=False, installer=installer)

        assert engine.resolve(vscode_item) == OutcomeKind.WARNING
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert outcome.warned == 1
        assert outcome.attempted == 0

    def test_unexpected_exception_is_contained(
        self, tracker: OutcomeTracker, vscode_item: Item
    ) -> None:
        """Exceptions become one error outcome instead of propagating."""
        installer = MagicMock()
        installer.methods.return_value = [Method("boom", MagicMock(side_effect=RuntimeError("kaboom")))]
        engine = _engine(tracker, installed=False, installer=installer)

        assert engine.resolve(vscode_item) == OutcomeKind.ERROR
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert outcome.failed == 1
        assert "kaboom" in outcome.details[0]

    def test_probe_exception_is_contained(self, tracker: OutcomeTracker, vscode_item: Item) -> None:
        """A failing probe is reported like any other unexpected error."""
        probe = MagicMock()
        probe.is_installed.side_effect = OSError("access denied")
        engine = ResolutionEngine(tracker, probe_factory=lambda provider: probe)

        assert engine.resolve(vscode_item) == OutcomeKind.ERROR
        assert tracker.has_errors is True


class TestStoreFallback:
    """Tests for the Microsoft Store source fallback."""

    @pytest.fixture
    def spotify(self) -> Item:
        """Store item."""
        return Item(key="Spotify", provider=Provider.MSSTORE, identifier="9NCBCSZSJRSB")

    def test_falls_back_to_plain_winget(self, tracker: OutcomeTracker, spotify: Item) -> None:
        """Store source is tried first, then plain winget."""
        engine = _engine(tracker, installed=False, installer=StoreInstaller())

        with patch("winprovision.installers.winget.run_command") as mock_run:
            mock_run.side_effect = [FAILED, OK]
            kind = engine.resolve(spotify)

        assert kind == OutcomeKind.SUCCESS
        assert mock_run.call_count == 2
        first = mock_run.call_args_list[0][0][0]
        second = mock_run.call_args_list[1][0][0]
        assert first[first.index("--source") + 1] == "msstore"
        assert "--source" not in second

        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert (outcome.attempted, outcome.succeeded, outcome.failed) == (1, 1, 0)

    def test_store_exception_falls_back(self, tracker: OutcomeTracker, spotify: Item) -> None:
        """A store call that raises still falls back to plain winget."""
        engine = _engine(tracker, installed=False, installer=StoreInstaller())

        with patch("winprovision.installers.winget.run_command") as mock_run:
            mock_run.side_effect = [subprocess.TimeoutExpired(["winget"], 1800), OK]
            kind = engine.resolve(spotify)

        assert kind == OutcomeKind.SUCCESS
        assert mock_run.call_count == 2
        assert "--source" not in mock_run.call_args_list[1][0][0]
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert (outcome.attempted, outcome.succeeded, outcome.failed) == (1, 1, 0)

    def test_store_success_skips_fallback(self, tracker: OutcomeTracker, spotify: Item) -> None:
        """A store success never runs the plain install."""
        engine = _engine(tracker, installed=False, installer=StoreInstaller())

        with patch("winprovision.installers.winget.run_command", return_value=OK) as mock_run:
            engine.resolve(spotify)

        mock_run.assert_called_once()

    def test_both_fail(self, tracker: OutcomeTracker, spotify: Item) -> None:
        """Two failures are recorded as a single error."""
        engine = _engine(tracker, installed=False, installer=StoreInstaller())

        with patch("winprovision.installers.winget.run_command", return_value=FAILED):
            kind = engine.resolve(spotify)

        assert kind == OutcomeKind.ERROR
        outcome = tracker.get(APPS_PHASE)
        assert outcome is not None
        assert outcome.failed == 1
        assert outcome.attempted == 1


class TestAutoLocation:
    """Tests for automatic install locations during resolution."""

    def test_generic_default_when_manifest_has_none(self, tracker: OutcomeTracker) -> None:
        """With no manifest location, the generic default is passed."""
        item = Item(key="VSCode", provider=Provider.WINGET, location_policy=LocationPolicy.AUTO)
        engine = _engine(tracker, installed=False, installer=WingetInstaller())

        with (
            patch("winprovision.installers.winget.lookup_install_location", return_value=None),
            patch(
                "winprovision.installers.winget.get_default_install_dir",
                return_value=r"C:\Program Files\VSCode",
            ),
            patch("winprovision.installers.winget.run_command", return_value=OK) as mock_run,
        ):
            kind = engine.resolve(item)

        assert kind == OutcomeKind.SUCCESS
        args = mock_run.call_args[0][0]
        assert args[args.index("--location") + 1] == r"C:\Program Files\VSCode"
