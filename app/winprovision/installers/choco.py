"""Chocolatey installer implementation.

Installs and uninstalls packages using choco.exe.
"""

import logging

from winprovision.installers.base import Installer
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.shell import resolve_executable, run_command

logger = logging.getLogger(__name__)


class ChocoInstaller(Installer):
    """Installer for Chocolatey packages."""

    # Timeout for choco operations (30 minutes)
    _CHOCO_TIMEOUT: float = 1800.0

    @property
    def provider(self) -> Provider:
        """Return CHOCO as the provider."""
        return Provider.CHOCO

    def install(self, item: Item) -> MethodResult:
        """Install a package with choco.

        Args:
            item: Item to install. ``aux.install_args`` are forwarded to the
                package's native installer.

        Returns:
            MethodResult for the installation.
        """
        if self.dry_run:
            return self._dry_run_result(item)

        args = [resolve_executable("choco"), "install", item.resolved_identifier, "-y", "--no-progress"]
        if item.aux.install_args:
            args.append(f"--install-arguments={item.aux.install_args}")

        logger.info("Installing %s with choco", item.resolved_identifier)
        result = run_command(args, timeout=self._CHOCO_TIMEOUT)
        return self._from_command(result, "choco")

    def install_many(self, packages: list[str]) -> MethodResult:
        """Install several packages in one choco invocation.

        Args:
            packages: Package ids to install.

        Returns:
            MethodResult for the batch.
        """
        if not packages:
            return MethodResult.ok("Nothing to install")
        if self.dry_run:
            return MethodResult.ok(f"Dry-run: would install {', '.join(packages)}")

        logger.info("Installing with choco: %s", ", ".join(packages))
        result = run_command(
            [resolve_executable("choco"), "install", *packages, "-y", "--no-progress"],
            timeout=self._CHOCO_TIMEOUT,
        )
        return self._from_command(result, "choco")

    def uninstall(self, item: Item) -> MethodResult:
        """Uninstall a package with choco.

        Args:
            item: Item to remove.

        Returns:
            MethodResult for the removal.
        """
        if self.dry_run:
            return self._dry_run_result(item, "uninstall")

        logger.info("Uninstalling %s with choco", item.resolved_identifier)
        result = run_command(
            [resolve_executable("choco"), "uninstall", item.resolved_identifier, "-y"],
            timeout=self._CHOCO_TIMEOUT,
        )
        return self._from_command(result, "choco", "uninstall")
