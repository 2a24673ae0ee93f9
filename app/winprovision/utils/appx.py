"""AppX (packaged application) helpers.

Detects and removes installed and provisioned packaged applications
using the PowerShell AppX cmdlets.
"""

import json
import logging
from typing import Any

from winprovision.utils.shell import CommandResult, quote_powershell, run_powershell

logger = logging.getLogger(__name__)

_APPX_TIMEOUT: float = 180.0


def _parse_packages(stdout: str) -> list[dict[str, Any]]:
    """Parse ConvertTo-Json output (a single object or a list)."""
    text = stdout.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Could not parse AppX query output: %r", text[:200])
        return []
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [entry for entry in data if isinstance(entry, dict)]
    return []


def find_appx_package(name: str) -> dict[str, Any] | None:
    """Find an installed packaged application by name.

    Args:
        name: Package name, e.g. 'Microsoft.BingNews'. Wildcards are allowed.

    Returns:
        Dictionary with Name and PackageFullName, or None if not installed.
    """
    command = (
        f"Get-AppxPackage -AllUsers -Name {quote_powershell(name)} -ErrorAction SilentlyContinue | "
        "Select-Object Name, PackageFullName | ConvertTo-Json -Compress"
    )
    result = run_powershell(command, timeout=_APPX_TIMEOUT)
    if not result.success:
        return None
    packages = _parse_packages(result.stdout)
    return packages[0] if packages else None


def remove_appx_package(full_name: str) -> CommandResult:
    """Remove an installed packaged application for all users.

    Args:
        full_name: The PackageFullName reported by Get-AppxPackage.

    Returns:
        CommandResult of the removal.
    """
    logger.info("Removing AppX package: %s", full_name)
    command = (
        f"Remove-AppxPackage -Package {quote_powershell(full_name)} -AllUsers -ErrorAction Stop"
    )
    return run_powershell(command, timeout=_APPX_TIMEOUT)


def find_provisioned_package(name: str) -> dict[str, Any] | None:
    """Find a provisioned (default image) package by fuzzy name match.

    Matches the name against both DisplayName and PackageName.

    Args:
        name: Name or identifier to look for.

    Returns:
        Dictionary with DisplayName and PackageName, or None if absent.
    """
    pattern = quote_powershell(f"*{name}*")
    command = (
        "Get-AppxProvisionedPackage -Online -ErrorAction SilentlyContinue | "
        f"Where-Object {{ $_.DisplayName -like {pattern} -or $_.PackageName -like {pattern} }} | "
        "Select-Object DisplayName, PackageName | ConvertTo-Json -Compress"
    )
    result = run_powershell(command, timeout=_APPX_TIMEOUT)
    if not result.success:
        return None
    packages = _parse_packages(result.stdout)
    return packages[0] if packages else None


def remove_provisioned_package(package_name: str) -> CommandResult:
    """Deprovision a package from the system image.

    Args:
        package_name: The PackageName reported by Get-AppxProvisionedPackage.

    Returns:
        CommandResult of the removal.
    """
    logger.info("Removing provisioned package: %s", package_name)
    command = (
        "Remove-AppxProvisionedPackage -Online "
        f"-PackageName {quote_powershell(package_name)} -ErrorAction Stop"
    )
    return run_powershell(command, timeout=_APPX_TIMEOUT)
