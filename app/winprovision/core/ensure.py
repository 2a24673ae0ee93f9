"""Provider availability.

Makes sure a provider's tool is usable before any of its items are
processed. Chocolatey and Scoop are bootstrapped through their official
PowerShell installers when missing; winget ships with Windows and is
only checked.
"""

import logging
import os
import subprocess
from pathlib import Path

from winprovision.models.item import Provider
from winprovision.utils.shell import command_exists, run_powershell

logger = logging.getLogger(__name__)

# Tool backing each provider; None means no external tool is needed
PROVIDER_COMMANDS: dict[Provider, str | None] = {
    Provider.WINGET: "winget",
    Provider.MSSTORE: "winget",
    Provider.CHOCO: "choco",
    Provider.SCOOP: "scoop",
    Provider.MANUAL: None,
    Provider.GITHUB: None,
}

_CHOCO_BOOTSTRAP = (
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    "iex ((New-Object System.Net.WebClient).DownloadString("
    "'https://community.chocolatey.org/install.ps1'))"
)

_SCOOP_BOOTSTRAP = (
    "Set-ExecutionPolicy RemoteSigned -Scope Process -Force; "
    "iex \"& {$(irm get.scoop.sh)} -RunAsAdmin\""
)

_BOOTSTRAP_TIMEOUT: float = 900.0


def _choco_bin_dir() -> Path:
    return Path(os.environ.get("ProgramData", r"C:\ProgramData")) / "chocolatey" / "bin"


def _scoop_shims_dir() -> Path:
    root = os.environ.get("SCOOP")
    return (Path(root) if root else Path.home() / "scoop") / "shims"


class ProviderEnsurer:
    """Ensures provider tools are available, at most once per provider.

    Results are cached, so repeated calls for the same provider never
    bootstrap twice.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the ensurer.

        Args:
            dry_run: If True, never bootstrap missing tools; they are reported
                as usable so the rest of the run can be simulated.
        """
        self.dry_run = dry_run
        self._cache: dict[str, bool] = {}

    def is_available(self, provider: Provider) -> bool:
        """Check if a provider's tool is present, without installing it."""
        command = PROVIDER_COMMANDS[provider]
        return command is None or command_exists(command)

    def ensure(self, provider: Provider) -> bool:
        """Make a provider usable.

        Args:
            provider: Provider to ensure.

        Returns:
            True if the provider can be used.
        """
        command = PROVIDER_COMMANDS[provider]
        if command is None:
            return True
        if command not in self._cache:
            self._cache[command] = self._ensure_command(command)
        return self._cache[command]

    def _ensure_command(self, command: str) -> bool:
        if command_exists(command):
            return True

        if command == "choco":
            script, bin_dir = _CHOCO_BOOTSTRAP, _choco_bin_dir()
        elif command == "scoop":
            script, bin_dir = _SCOOP_BOOTSTRAP, _scoop_shims_dir()
        else:
            logger.error("%s is not available and cannot be installed automatically", command)
            return False

        if self.dry_run:
            logger.info("Dry-run: would install %s", command)
            return True

        logger.info("%s not found; installing it", command)
        try:
            result = run_powershell(script, timeout=_BOOTSTRAP_TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("Failed to install %s: %s", command, e)
            return False
        if not result.success:
            logger.error("Failed to install %s: %s", command, result.output or "unknown error")
            return False

        # The installer updates PATH for new shells only
        if bin_dir.is_dir():
            os.environ["PATH"] = f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}"

        available = command_exists(command)
        if not available:
            logger.error("%s was installed but is still not on PATH", command)
        return available
