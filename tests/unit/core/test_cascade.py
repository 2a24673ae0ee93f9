"""Unit tests for the method cascade."""

from unittest.mock import MagicMock

from winprovision.core.cascade import Method, run_cascade
from winprovision.models.item import Item
from winprovision.models.outcome import MethodResult, OutcomeKind


class TestRunCascade:
    """Tests for run_cascade function."""

    def test_stops_at_first_success(self, vscode_item: Item) -> None:
        """Later methods are not run after a success."""
        first = MagicMock(return_value=MethodResult.ok("done"))
        second = MagicMock(return_value=MethodResult.ok("never"))

        result = run_cascade([Method("a", first), Method("b", second)], vscode_item)

        assert result.message == "done"
        second.assert_not_called()

    def test_raising_method_falls_back(self, vscode_item: Item) -> None:
        """An exception counts as a failure and the next method runs."""
        first = MagicMock(side_effect=OSError("winget.exe vanished"))
        second = MagicMock(return_value=MethodResult.ok("done"))

        result = run_cascade([Method("a", first), Method("b", second)], vscode_item)

        assert result.success is True
        second.assert_called_once_with(vscode_item)

    def test_raising_last_method_is_error(self, vscode_item: Item) -> None:
        """A raising final method yields an error carrying the exception text."""
        only = MagicMock(side_effect=RuntimeError("kaboom"))

        result = run_cascade([Method("a", only)], vscode_item)

        assert result.kind == OutcomeKind.ERROR
        assert "kaboom" in result.message

    def test_falls_back_after_failure(self, vscode_item: Item) -> None:
        """A failing method hands over to the next one."""
        first = MagicMock(return_value=MethodResult.error("nope"))
        second = MagicMock(return_value=MethodResult.ok("done"))

        result = run_cascade([Method("a", first), Method("b", second)], vscode_item)

        assert result.success is True
        first.assert_called_once_with(vscode_item)
        second.assert_called_once_with(vscode_item)

    def test_warning_stops_cascade(self, vscode_item: Item) -> None:
        """A warning is final; nothing else is attempted."""
        first = MagicMock(return_value=MethodResult.warning("unsupported"))
        second = MagicMock(return_value=MethodResult.ok())

        result = run_cascade([Method("a", first), Method("b", second)], vscode_item)

        assert result.kind == OutcomeKind.WARNING
        second.assert_not_called()

    def test_returns_last_failure(self, vscode_item: Item) -> None:
        """When every method fails, the last failure is reported."""
        methods = [
            Method("a", MagicMock(return_value=MethodResult.error("first"))),
            Method("b", MagicMock(return_value=MethodResult.error("second"))),
        ]

        result = run_cascade(methods, vscode_item)

        assert result.failed is True
        assert result.message == "second"

    def test_no_methods(self, vscode_item: Item) -> None:
        """An empty cascade is an error."""
        result = run_cascade([], vscode_item)
        assert result.failed is True
        assert "winget" in result.message
