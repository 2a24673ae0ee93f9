"""Scoop installer implementation.

Installs applications using the scoop shim, registering buckets on demand.
"""

import logging

from winprovision.installers.base import Installer
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.shell import resolve_executable, run_command

logger = logging.getLogger(__name__)


class ScoopInstaller(Installer):
    """Installer for Scoop applications."""

    # Timeout for scoop operations (30 minutes)
    _SCOOP_TIMEOUT: float = 1800.0

    @property
    def provider(self) -> Provider:
        """Return SCOOP as the provider."""
        return Provider.SCOOP

    def add_bucket(self, bucket: str) -> bool:
        """Register a bucket.

        Failure is not fatal: the bucket may already be registered, and
        the install attempt reports the real problem if there is one.

        Args:
            bucket: Bucket name (e.g., 'extras').

        Returns:
            True if the bucket was added, False otherwise.
        """
        if self.dry_run:
            logger.info("Dry-run: would add scoop bucket %s", bucket)
            return True

        result = run_command(
            [resolve_executable("scoop"), "bucket", "add", bucket],
            timeout=self._SCOOP_TIMEOUT,
        )
        if not result.success:
            logger.warning(
                "Could not add scoop bucket %s (continuing): %s",
                bucket,
                result.output or "unknown error",
            )
            return False
        return True

    def install(self, item: Item) -> MethodResult:
        """Install an application with scoop.

        Args:
            item: Item to install. ``aux.bucket`` is registered first when set.

        Returns:
            MethodResult for the installation.
        """
        identifier = item.resolved_identifier
        bucket = item.aux.bucket
        if bucket:
            self.add_bucket(bucket)
            if "/" not in identifier:
                identifier = f"{bucket}/{identifier}"

        if self.dry_run:
            return MethodResult.ok(f"Dry-run: would install {identifier}")

        logger.info("Installing %s with scoop", identifier)
        result = run_command(
            [resolve_executable("scoop"), "install", identifier],
            timeout=self._SCOOP_TIMEOUT,
        )
        return self._from_command(result, "scoop")

    def install_many(self, apps: list[str]) -> MethodResult:
        """Install several applications in one scoop invocation.

        Args:
            apps: Application names, optionally ``bucket/name``.

        Returns:
            MethodResult for the batch.
        """
        if not apps:
            return MethodResult.ok("Nothing to install")
        if self.dry_run:
            return MethodResult.ok(f"Dry-run: would install {', '.join(apps)}")

        logger.info("Installing with scoop: %s", ", ".join(apps))
        result = run_command(
            [resolve_executable("scoop"), "install", *apps],
            timeout=self._SCOOP_TIMEOUT,
        )
        return self._from_command(result, "scoop")

    def clear_cache(self) -> MethodResult:
        """Remove all cached downloads."""
        if self.dry_run:
            return MethodResult.ok("Dry-run: would clear the scoop cache")

        result = run_command(
            [resolve_executable("scoop"), "cache", "rm", "*"],
            timeout=self._SCOOP_TIMEOUT,
        )
        return self._from_command(result, "scoop", "cache rm")
