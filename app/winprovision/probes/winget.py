"""Winget installed-state probe.

Uses ``winget list`` filtered by exact package id.
"""

from winprovision.models.item import Provider
from winprovision.probes.base import ListingProbe


class WingetProbe(ListingProbe):
    """Probe for packages installed through the Windows Package Manager."""

    _COMMAND = "winget"

    @property
    def provider(self) -> Provider:
        """Return WINGET as the provider."""
        return Provider.WINGET

    def _list_args(self, identifier: str) -> list[str]:
        return [
            "list",
            "--id",
            identifier,
            "--exact",
            "--accept-source-agreements",
            "--disable-interactivity",
        ]


class StoreProbe(WingetProbe):
    """Probe for Microsoft Store packages.

    Store-sourced packages are listed by winget exactly like any other
    package, so detection delegates entirely to the winget probe.
    """

    @property
    def provider(self) -> Provider:
        """Return MSSTORE as the provider."""
        return Provider.MSSTORE
