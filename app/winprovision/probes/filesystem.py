"""Filesystem installed-state probe.

Used for manually downloaded installers and release assets, which leave
no package manager record behind. The only signal is the configured
install location.
"""

import logging

from winprovision.core.paths import expand_path
from winprovision.models.item import Item, Provider
from winprovision.probes.base import Probe

logger = logging.getLogger(__name__)


class FilesystemProbe(Probe):
    """Probe that checks whether the configured install location exists.

    Without a configured location the install state cannot be
    determined; the item is reported as not installed and a caveat is
    logged.
    """

    def __init__(self, provider: Provider = Provider.MANUAL) -> None:
        """Initialize the probe.

        Args:
            provider: MANUAL or GITHUB.
        """
        self._provider = provider

    @property
    def provider(self) -> Provider:
        """Return the provider this probe was created for."""
        return self._provider

    def is_available(self) -> bool:
        """Filesystem checks are always possible."""
        return True

    def is_installed(self, item: Item) -> bool:
        """Check if the item's install location exists."""
        if not item.install_location:
            logger.warning(
                "Cannot determine install state of %s: no install location configured",
                item.key,
            )
            return False

        path = expand_path(item.install_location)
        exists = path.exists()
        logger.debug("Install location %s for %s exists: %s", path, item.key, exists)
        return exists
