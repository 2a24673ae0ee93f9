"""Abstract base class for installers.

This module defines the Installer interface that every provider
implements to realize an item's desired state.
"""

from abc import ABC, abstractmethod

from winprovision.core.cascade import Method
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.shell import CommandResult


class Installer(ABC):
    """Abstract base class for all installers.

    Installers run the mutating commands of one provider. They report a
    MethodResult and never record outcomes themselves; that is the
    resolution engine's job.

    Attributes:
        dry_run: If True, only simulate actions without executing them.

    Example:
        >>> installer = WingetInstaller(dry_run=True)
        >>> installer.install(Item(key="VSCode", provider=Provider.WINGET)).success
        True
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the installer.

        Args:
            dry_run: If True, only simulate actions without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if installer is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def provider(self) -> Provider:
        """Return the provider this installer handles."""

    @abstractmethod
    def install(self, item: Item) -> MethodResult:
        """Install a single item.

        Args:
            item: Item to install.

        Returns:
            MethodResult describing the outcome.
        """

    def methods(self) -> list[Method]:
        """Return the ordered candidate methods for this provider.

        Most providers have a single method; providers with a fallback
        policy override this.
        """
        return [Method(name=self.provider.value, run=self.install)]

    def _dry_run_result(self, item: Item, verb: str = "install") -> MethodResult:
        return MethodResult.ok(f"Dry-run: would {verb} {item.resolved_identifier}")

    @staticmethod
    def _from_command(result: CommandResult, tool: str, verb: str = "install") -> MethodResult:
        """Translate a command result into a MethodResult."""
        if result.success:
            return MethodResult.ok(f"{tool} {verb} completed")
        # Package manager output is verbose; the last line carries the reason
        lines = [line.strip() for line in result.output.splitlines() if line.strip()]
        detail = lines[-1] if lines else f"{tool} {verb} failed"
        return MethodResult.error(f"{tool} {verb} exited with {result.returncode}: {detail}")
