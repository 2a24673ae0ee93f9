"""Unit tests for ProviderEnsurer."""

from unittest.mock import patch

from winprovision.core.ensure import ProviderEnsurer
from winprovision.models.item import Provider
from winprovision.utils.shell import CommandResult


class TestProviderEnsurer:
    """Tests for ProviderEnsurer class."""

    def test_no_tool_needed(self) -> None:
        """Manual and GitHub providers need no tool."""
        ensurer = ProviderEnsurer()
        with patch("winprovision.core.ensure.command_exists") as mock_exists:
            assert ensurer.ensure(Provider.MANUAL) is True
            assert ensurer.is_available(Provider.GITHUB) is True
        mock_exists.assert_not_called()

    def test_present_tool(self) -> None:
        """An installed tool is usable without bootstrapping."""
        with (
            patch("winprovision.core.ensure.command_exists", return_value=True),
            patch("winprovision.core.ensure.run_powershell") as mock_ps,
        ):
            assert ProviderEnsurer().ensure(Provider.CHOCO) is True
        mock_ps.assert_not_called()

    def test_winget_cannot_be_bootstrapped(self) -> None:
        """Missing winget is reported, never installed."""
        with (
            patch("winprovision.core.ensure.command_exists", return_value=False),
            patch("winprovision.core.ensure.run_powershell") as mock_ps,
        ):
            assert ProviderEnsurer().ensure(Provider.MSSTORE) is False
        mock_ps.assert_not_called()

    def test_bootstraps_once(self) -> None:
        """A missing tool is installed once and the result cached."""
        ensurer = ProviderEnsurer()
        with (
            patch("winprovision.core.ensure.command_exists", side_effect=[False, True]),
            patch("winprovision.core.ensure.run_powershell") as mock_ps,
        ):
            mock_ps.return_value = CommandResult(stdout="", stderr="", returncode=0)
            assert ensurer.ensure(Provider.SCOOP) is True
            assert ensurer.ensure(Provider.SCOOP) is True

        mock_ps.assert_called_once()
        assert "get.scoop.sh" in mock_ps.call_args[0][0]

    def test_failed_bootstrap(self) -> None:
        """A failing installer leaves the provider unavailable."""
        with (
            patch("winprovision.core.ensure.command_exists", return_value=False),
            patch("winprovision.core.ensure.run_powershell") as mock_ps,
        ):
            mock_ps.return_value = CommandResult(stdout="", stderr="blocked", returncode=1)
            assert ProviderEnsurer().ensure(Provider.CHOCO) is False

    def test_dry_run_does_not_bootstrap(self) -> None:
        """Dry-run reports the tool usable without installing it."""
        with (
            patch("winprovision.core.ensure.command_exists", return_value=False),
            patch("winprovision.core.ensure.run_powershell") as mock_ps,
        ):
            assert ProviderEnsurer(dry_run=True).ensure(Provider.CHOCO) is True
        mock_ps.assert_not_called()

    def test_store_shares_winget_cache(self) -> None:
        """winget and msstore are checked through the same tool."""
        ensurer = ProviderEnsurer()
        with patch("winprovision.core.ensure.command_exists", return_value=True) as mock_exists:
            ensurer.ensure(Provider.WINGET)
            ensurer.ensure(Provider.MSSTORE)
        mock_exists.assert_called_once_with("winget")
