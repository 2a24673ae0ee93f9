"""GitHub release asset installer implementation.

Downloads an asset from the latest release of a repository and installs
it the same way as a manual download.
"""

import fnmatch
import logging
from pathlib import Path
from typing import Any

from winprovision.installers.base import Installer
from winprovision.installers.manual import ManualInstaller
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.download import DownloadError, download_file, fetch_json

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"

# Convenience aliases selecting the newest asset with a given extension
ASSET_ALIASES: dict[str, str] = {
    "latest-exe": ".exe",
    "latest-msi": ".msi",
}


def latest_release_url(repo: str) -> str:
    """Return the API URL of a repository's latest release."""
    return f"{GITHUB_API}/repos/{repo}/releases/latest"


def select_asset(assets: list[dict[str, Any]], pattern: str) -> dict[str, Any] | None:
    """Select the release asset matching a pattern.

    Args:
        assets: Asset objects from the GitHub release API.
        pattern: ``latest-exe``/``latest-msi`` alias, or a wildcard
            matched case-insensitively against the asset name.

    Returns:
        The selected asset, or None if nothing matches.
    """
    alias = ASSET_ALIASES.get(pattern.strip().lower())
    if alias is not None:
        candidates = [a for a in assets if str(a.get("name", "")).lower().endswith(alias)]
        candidates.sort(key=lambda a: str(a.get("created_at", "")), reverse=True)
        return candidates[0] if candidates else None

    lowered = pattern.lower()
    for asset in assets:
        if fnmatch.fnmatchcase(str(asset.get("name", "")).lower(), lowered):
            return asset
    return None


class ReleaseInstaller(Installer):
    """Installer for assets attached to the latest GitHub release."""

    def __init__(
        self,
        dry_run: bool = False,
        temp_root: Path | None = None,
        manual: ManualInstaller | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            dry_run: If True, only simulate actions without executing them.
            temp_root: Parent directory for temporary work.
            manual: Installer used to run the downloaded asset.
        """
        super().__init__(dry_run=dry_run)
        self._manual = manual or ManualInstaller(dry_run=dry_run, temp_root=temp_root)

    @property
    def provider(self) -> Provider:
        """Return GITHUB as the provider."""
        return Provider.GITHUB

    def install(self, item: Item) -> MethodResult:
        """Download the matching release asset and install it.

        Args:
            item: Item with ``aux.repo`` and ``aux.asset_pattern``.

        Returns:
            MethodResult for the installation.
        """
        repo = item.aux.repo
        pattern = item.aux.asset_pattern
        if not repo or not pattern:
            return MethodResult.error(f"{item.key}: github provider requires repo and asset_pattern")
        if self.dry_run:
            return MethodResult.ok(f"Dry-run: would install {pattern} from {repo}")

        try:
            release = fetch_json(latest_release_url(repo))
        except DownloadError as e:
            return MethodResult.error(str(e))

        assets = release.get("assets", []) if isinstance(release, dict) else []
        asset = select_asset(assets, pattern)
        if asset is None:
            return MethodResult.error(f"No asset matching '{pattern}' in latest release of {repo}")

        name = str(asset["name"])
        logger.info("Selected release asset %s from %s", name, repo)
        with self._manual.work_dir("release-") as work:
            target = Path(work) / name
            try:
                download_file(str(asset["browser_download_url"]), target)
            except DownloadError as e:
                return MethodResult.error(str(e))
            return self._manual.install_file(target, item)
