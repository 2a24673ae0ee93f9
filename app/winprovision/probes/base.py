"""Abstract base classes for installed-state probes.

This module defines the Probe interface that every provider adapter
implements, plus a shared base for package managers whose local
listing command is matched against the item identifier.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from winprovision.models.item import Item, Provider
from winprovision.utils.shell import CommandResult, command_exists, resolve_executable, run_command

logger = logging.getLogger(__name__)


class Probe(ABC):
    """Abstract base class for all installed-state probes.

    Probes are read-only: they never change system state. A probe must
    tolerate a missing provider CLI and report "not installed" instead
    of raising.

    Example:
        >>> probe = WingetProbe()
        >>> probe.is_installed(Item(key="VSCode", provider=Provider.WINGET))
        False
    """

    @property
    @abstractmethod
    def provider(self) -> Provider:
        """Return the provider this probe handles."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the probe can run on this system.

        Returns:
            True if the underlying tool is present, False otherwise.
        """

    @abstractmethod
    def is_installed(self, item: Item) -> bool:
        """Check whether the item is already present.

        Args:
            item: The item to look up.

        Returns:
            True if installed, False if absent or undeterminable.
        """


class ListingProbe(Probe):
    """Probe backed by a package manager's local listing command.

    A zero exit status alone is not sufficient: winget, choco and scoop
    all exit 0 when nothing matches, so the identifier must also appear
    in the output.
    """

    # Executable name of the package manager
    _COMMAND: str = ""

    # Timeout for listing operations
    _LIST_TIMEOUT: float = 60.0

    def is_available(self) -> bool:
        """Check if the package manager CLI is available."""
        return command_exists(self._COMMAND)

    @abstractmethod
    def _list_args(self, identifier: str) -> list[str]:
        """Build the listing arguments (without the executable)."""

    def _match_token(self, identifier: str) -> str:
        """Return the text expected in the listing output."""
        return identifier

    def is_installed(self, item: Item) -> bool:
        """Check if the package manager lists the item locally."""
        identifier = item.resolved_identifier
        if not self.is_available():
            logger.debug("%s not available; treating %s as not installed", self._COMMAND, identifier)
            return False

        try:
            result = run_command(
                [resolve_executable(self._COMMAND), *self._list_args(identifier)],
                timeout=self._LIST_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("%s listing failed for %s: %s", self._COMMAND, identifier, e)
            return False

        return self._matches(result, identifier)

    def _matches(self, result: CommandResult, identifier: str) -> bool:
        """Check the listing result for a positive identifier match."""
        if not result.success:
            return False
        token = self._match_token(identifier).casefold()
        found = token in result.stdout.casefold()
        logger.debug(
            "%s listing for %s: %s", self._COMMAND, identifier, "found" if found else "not found"
        )
        return found
