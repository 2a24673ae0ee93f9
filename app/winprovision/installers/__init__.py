"""Installers realizing an item's desired state per provider.

This module provides abstract and concrete implementations of
installers for winget, the Microsoft Store, Chocolatey, Scoop, manual
downloads and GitHub release assets.
"""

from pathlib import Path

from winprovision.installers.base import Installer
from winprovision.installers.choco import ChocoInstaller
from winprovision.installers.manual import ManualInstaller
from winprovision.installers.release import ReleaseInstaller
from winprovision.installers.scoop import ScoopInstaller
from winprovision.installers.winget import StoreInstaller, WingetInstaller
from winprovision.models.item import Provider


def get_installer(
    provider: Provider,
    *,
    dry_run: bool = False,
    temp_root: Path | None = None,
) -> Installer:
    """Get the installer for a provider.

    Args:
        provider: Provider of the item.
        dry_run: Whether to run in dry-run mode.
        temp_root: Parent directory for temporary downloads.

    Returns:
        Installer instance for that provider.
    """
    if provider == Provider.WINGET:
        return WingetInstaller(dry_run=dry_run)
    if provider == Provider.MSSTORE:
        return StoreInstaller(dry_run=dry_run)
    if provider == Provider.CHOCO:
        return ChocoInstaller(dry_run=dry_run)
    if provider == Provider.SCOOP:
        return ScoopInstaller(dry_run=dry_run)
    if provider == Provider.MANUAL:
        return ManualInstaller(dry_run=dry_run, temp_root=temp_root)
    return ReleaseInstaller(dry_run=dry_run, temp_root=temp_root)


__all__ = [
    "ChocoInstaller",
    "Installer",
    "ManualInstaller",
    "ReleaseInstaller",
    "ScoopInstaller",
    "StoreInstaller",
    "WingetInstaller",
    "get_installer",
]
