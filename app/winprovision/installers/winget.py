"""Winget installer implementation.

Installs and uninstalls packages using the Windows Package Manager,
including the Microsoft Store source.
"""

import logging

from winprovision.core.cascade import Method
from winprovision.core.locations import lookup_install_location
from winprovision.core.paths import get_default_install_dir
from winprovision.installers.base import Installer
from winprovision.models.item import Item, LocationPolicy, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.shell import resolve_executable, run_command

logger = logging.getLogger(__name__)

STORE_SOURCE = "msstore"


class WingetInstaller(Installer):
    """Installer for winget packages.

    Uses ``winget install --id <id> --exact --silent``. A nonzero exit is
    a hard failure for the item; there is no retry at this layer.
    """

    # Timeout for winget operations (30 minutes; some installers are large)
    _WINGET_TIMEOUT: float = 1800.0

    @property
    def provider(self) -> Provider:
        """Return WINGET as the provider."""
        return Provider.WINGET

    def resolve_location(self, item: Item) -> str | None:
        """Resolve the install-location argument for an item.

        Args:
            item: Item being installed.

        Returns:
            Location path, or None when the argument must be omitted.
        """
        if item.location_policy == LocationPolicy.SUPPRESSED:
            return None
        if item.location_policy == LocationPolicy.EXPLICIT:
            return item.install_location

        location = lookup_install_location(item.resolved_identifier)
        if location:
            logger.debug("Manifest location for %s: %s", item.key, location)
            return location
        default = get_default_install_dir(item.key)
        logger.debug("No manifest location for %s; using default %s", item.key, default)
        return default

    def build_install_args(
        self,
        item: Item,
        *,
        source: str | None = None,
        location: str | None = None,
    ) -> list[str]:
        """Build the winget install command line."""
        args = [
            resolve_executable("winget"),
            "install",
            "--id",
            item.resolved_identifier,
            "--exact",
            "--silent",
            "--accept-package-agreements",
            "--accept-source-agreements",
            "--disable-interactivity",
        ]
        if source:
            args.extend(["--source", source])
        if location:
            args.extend(["--location", location])
        return args

    def install(self, item: Item, *, source: str | None = None) -> MethodResult:
        """Install a package with winget.

        Args:
            item: Item to install.
            source: Optional winget source name (e.g., 'msstore').

        Returns:
            MethodResult for the installation.
        """
        location = self.resolve_location(item)
        args = self.build_install_args(item, source=source, location=location)

        if self.dry_run:
            logger.info("Dry-run: would run %s", " ".join(args))
            return self._dry_run_result(item)

        logger.info(
            "Installing %s with winget (source=%s, location=%s)",
            item.resolved_identifier,
            source or "default",
            location or "default",
        )
        result = run_command(args, timeout=self._WINGET_TIMEOUT)
        return self._from_command(result, "winget")

    def uninstall(self, item: Item) -> MethodResult:
        """Uninstall a package with winget.

        Args:
            item: Item to remove.

        Returns:
            MethodResult for the removal.
        """
        if self.dry_run:
            return self._dry_run_result(item, "uninstall")

        args = [
            resolve_executable("winget"),
            "uninstall",
            "--id",
            item.resolved_identifier,
            "--exact",
            "--silent",
            "--accept-source-agreements",
            "--disable-interactivity",
        ]
        logger.info("Uninstalling %s with winget", item.resolved_identifier)
        result = run_command(args, timeout=self._WINGET_TIMEOUT)
        return self._from_command(result, "winget", "uninstall")


class StoreInstaller(WingetInstaller):
    """Installer for Microsoft Store packages.

    Tries winget with the store source first and, if that fails, a
    plain winget invocation without the source flag.
    """

    @property
    def provider(self) -> Provider:
        """Return MSSTORE as the provider."""
        return Provider.MSSTORE

    def install_from_store(self, item: Item) -> MethodResult:
        """Install using the Microsoft Store source."""
        return self.install(item, source=STORE_SOURCE)

    def install_plain(self, item: Item) -> MethodResult:
        """Install using winget's default sources."""
        return self.install(item)

    def methods(self) -> list[Method]:
        """Return the store-then-plain fallback sequence."""
        return [
            Method(name="winget (msstore)", run=self.install_from_store),
            Method(name="winget", run=self.install_plain),
        ]
