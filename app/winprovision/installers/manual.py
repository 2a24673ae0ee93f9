"""Manual download installer implementation.

Downloads an installer (or uses a local file) and runs it silently,
unpacking zip archives to find the installer inside. Every download and
extraction directory is removed before the call returns.
"""

import logging
import re
import shlex
import tempfile
from pathlib import Path

from winprovision.core.paths import expand_path
from winprovision.installers.base import Installer
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.archive import ArchiveError, extract_zip
from winprovision.utils.download import DownloadError, download_file, filename_from_url
from winprovision.utils.shell import run_command

logger = logging.getLogger(__name__)

# Common installer names found inside archives
_INSTALLER_NAME = re.compile(r"(setup|(?<!un)install|update)[^\\/]*\.(exe|msi)$", re.IGNORECASE)

_DEFAULT_EXE_ARGS = "/S"


class ManualInstaller(Installer):
    """Installer for manually downloaded .exe, .msi and .zip installers.

    Attributes:
        temp_root: Directory under which per-item work directories are created.
    """

    # Timeout for running a vendor installer (30 minutes)
    _INSTALLER_TIMEOUT: float = 1800.0

    def __init__(self, dry_run: bool = False, temp_root: Path | None = None) -> None:
        """Initialize the installer.

        Args:
            dry_run: If True, only simulate actions without executing them.
            temp_root: Parent directory for temporary work. Defaults to the
                system temp directory.
        """
        super().__init__(dry_run=dry_run)
        self._temp_root = temp_root

    @property
    def provider(self) -> Provider:
        """Return MANUAL as the provider."""
        return Provider.MANUAL

    def work_dir(self, prefix: str) -> tempfile.TemporaryDirectory[str]:
        """Create a scoped temporary directory under the temp root.

        Args:
            prefix: Directory name prefix.

        Returns:
            TemporaryDirectory removed when its context exits.
        """
        if self._temp_root is not None:
            self._temp_root.mkdir(parents=True, exist_ok=True)
        return tempfile.TemporaryDirectory(
            prefix=prefix,
            dir=self._temp_root,
            ignore_cleanup_errors=True,
        )

    def install(self, item: Item) -> MethodResult:
        """Install from a local file or a downloaded URL.

        Args:
            item: Item with ``aux.local_path`` or ``aux.download_url``.

        Returns:
            MethodResult for the installation.
        """
        aux = item.aux
        if aux.local_path:
            path = expand_path(aux.local_path)
            if not path.is_file():
                return MethodResult.error(f"Installer file not found: {path}")
            if self.dry_run:
                return self._dry_run_result(item)
            return self.install_file(path, item)

        if not aux.download_url:
            return MethodResult.error(f"No download_url or local_path configured for {item.key}")
        if self.dry_run:
            return MethodResult.ok(f"Dry-run: would download and install {aux.download_url}")

        with self.work_dir("download-") as work:
            target = Path(work) / filename_from_url(aux.download_url, f"{item.key}.exe")
            try:
                download_file(aux.download_url, target)
            except DownloadError as e:
                return MethodResult.error(str(e))
            return self.install_file(target, item)

    def install_file(self, path: Path, item: Item, *, nested: bool = False) -> MethodResult:
        """Run an installer file according to its extension.

        Args:
            path: Installer file (.exe, .msi or .zip).
            item: Item providing installer arguments and archive hints.
            nested: True when the file came out of an archive.

        Returns:
            MethodResult for the installation. Unknown extensions yield a
            warning since nothing was attempted.
        """
        suffix = path.suffix.lower()
        if suffix == ".exe":
            return self._run_exe(path, item)
        if suffix == ".msi":
            return self._run_msi(path, item)
        if suffix == ".zip" and not nested:
            return self._install_from_zip(path, item)
        return MethodResult.warning(f"Unsupported installer type '{suffix or path.name}' for {item.key}")

    def _run_exe(self, path: Path, item: Item) -> MethodResult:
        args = shlex.split(item.aux.install_args or _DEFAULT_EXE_ARGS, posix=False)
        logger.info("Running installer %s %s", path.name, " ".join(args))
        result = run_command([str(path), *args], timeout=self._INSTALLER_TIMEOUT)
        return self._from_command(result, path.name)

    def _run_msi(self, path: Path, item: Item) -> MethodResult:
        extra = shlex.split(item.aux.install_args, posix=False) if item.aux.install_args else []
        logger.info("Running msiexec for %s", path.name)
        result = run_command(
            ["msiexec", "/i", str(path), "/qn", "/norestart", *extra],
            timeout=self._INSTALLER_TIMEOUT,
        )
        return self._from_command(result, "msiexec")

    def _install_from_zip(self, archive: Path, item: Item) -> MethodResult:
        with self.work_dir("extract-") as work:
            extract_dir = Path(work)
            try:
                extract_zip(archive, extract_dir)
            except ArchiveError as e:
                return MethodResult.error(str(e))

            installer = find_installer(extract_dir, item.aux.archive_path)
            if installer is None:
                return MethodResult.error(f"No common installer found in {archive.name}")

            logger.info("Found installer %s in %s", installer.name, archive.name)
            return self.install_file(installer, item, nested=True)


def find_installer(root: Path, hint: str | None = None) -> Path | None:
    """Locate an installer inside an extracted archive.

    Args:
        root: Extraction directory.
        hint: Configured archive-internal path, relative to ``root``.

    Returns:
        Path to the installer, or None if nothing suitable exists.
    """
    if hint:
        candidate = root / hint
        if candidate.is_file():
            return candidate
        logger.warning("Configured archive path %s not found in archive; searching by name", hint)

    for path in sorted(root.rglob("*")):
        if path.is_file() and _INSTALLER_NAME.search(path.name):
            return path
    return None
