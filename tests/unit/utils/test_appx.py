"""Unit tests for AppX helpers."""

from unittest.mock import patch

from winprovision.utils.appx import (
    find_appx_package,
    find_provisioned_package,
    remove_appx_package,
)
from winprovision.utils.shell import CommandResult


class TestFindAppxPackage:
    """Tests for find_appx_package function."""

    def test_single_object(self) -> None:
        """A single JSON object is returned as the package."""
        stdout = '{"Name":"Microsoft.BingNews","PackageFullName":"Microsoft.BingNews_1_x64__8we"}'
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout=stdout, stderr="", returncode=0)
            package = find_appx_package("Microsoft.BingNews")

        assert package == {"Name": "Microsoft.BingNews", "PackageFullName": "Microsoft.BingNews_1_x64__8we"}
        assert "-Name 'Microsoft.BingNews'" in mock_ps.call_args[0][0]

    def test_list_returns_first(self) -> None:
        """For several matches the first is returned."""
        stdout = '[{"Name":"A","PackageFullName":"A_1"},{"Name":"A","PackageFullName":"A_2"}]'
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout=stdout, stderr="", returncode=0)
            package = find_appx_package("A")

        assert package is not None
        assert package["PackageFullName"] == "A_1"

    def test_not_installed(self) -> None:
        """Empty output means not installed."""
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout="", stderr="", returncode=0)
            assert find_appx_package("Nope") is None

    def test_garbage_output(self) -> None:
        """Unparseable output means not installed."""
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout="WARNING: blah", stderr="", returncode=0)
            assert find_appx_package("Nope") is None


class TestProvisioned:
    """Tests for provisioned package helpers."""

    def test_wildcard_match(self) -> None:
        """Provisioned packages are matched by wildcard on both names."""
        stdout = '{"DisplayName":"Microsoft.BingNews","PackageName":"Microsoft.BingNews_1_neutral"}'
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout=stdout, stderr="", returncode=0)
            package = find_provisioned_package("BingNews")

        assert package is not None
        command = mock_ps.call_args[0][0]
        assert "'*BingNews*'" in command
        assert "DisplayName" in command
        assert "PackageName" in command

    def test_remove_quotes_name(self) -> None:
        """Package names are quoted for PowerShell."""
        with patch("winprovision.utils.appx.run_powershell") as mock_ps:
            mock_ps.return_value = CommandResult(stdout="", stderr="", returncode=0)
            remove_appx_package("Odd'Name_1")

        assert "'Odd''Name_1'" in mock_ps.call_args[0][0]
