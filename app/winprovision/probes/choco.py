"""Chocolatey installed-state probe.

Uses ``choco list --exact`` with machine-readable output (``id|version``).
"""

from winprovision.models.item import Provider
from winprovision.probes.base import ListingProbe


class ChocoProbe(ListingProbe):
    """Probe for packages installed through Chocolatey."""

    _COMMAND = "choco"

    @property
    def provider(self) -> Provider:
        """Return CHOCO as the provider."""
        return Provider.CHOCO

    def _list_args(self, identifier: str) -> list[str]:
        return ["list", "--exact", identifier, "--limit-output"]

    def _match_token(self, identifier: str) -> str:
        # --limit-output prints "<id>|<version>"
        return f"{identifier}|"
