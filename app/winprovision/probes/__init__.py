"""Installed-state probes for different providers.

This module exports the probe classes and a factory selecting the
adapter for a provider.
"""

from winprovision.models.item import Provider
from winprovision.probes.base import ListingProbe, Probe
from winprovision.probes.choco import ChocoProbe
from winprovision.probes.filesystem import FilesystemProbe
from winprovision.probes.scoop import ScoopProbe
from winprovision.probes.winget import StoreProbe, WingetProbe


def get_probe(provider: Provider) -> Probe:
    """Get the probe adapter for a provider.

    Args:
        provider: Provider of the item to probe.

    Returns:
        Probe instance handling that provider.
    """
    if provider == Provider.WINGET:
        return WingetProbe()
    if provider == Provider.MSSTORE:
        return StoreProbe()
    if provider == Provider.CHOCO:
        return ChocoProbe()
    if provider == Provider.SCOOP:
        return ScoopProbe()
    return FilesystemProbe(provider)


__all__ = [
    "ChocoProbe",
    "FilesystemProbe",
    "ListingProbe",
    "Probe",
    "ScoopProbe",
    "StoreProbe",
    "WingetProbe",
    "get_probe",
]
