"""Scoop installed-state probe.

Uses ``scoop list <name>``. Identifiers may be written as
``bucket/name``; only the name appears in the listing.
"""

from winprovision.models.item import Provider
from winprovision.probes.base import ListingProbe


def scoop_app_name(identifier: str) -> str:
    """Strip an optional ``bucket/`` prefix from a Scoop identifier."""
    return identifier.rsplit("/", 1)[-1]


class ScoopProbe(ListingProbe):
    """Probe for applications installed through Scoop."""

    _COMMAND = "scoop"

    @property
    def provider(self) -> Provider:
        """Return SCOOP as the provider."""
        return Provider.SCOOP

    def _list_args(self, identifier: str) -> list[str]:
        return ["list", scoop_app_name(identifier)]

    def _match_token(self, identifier: str) -> str:
        return scoop_app_name(identifier)
