"""Install-location lookup for winget packages.

Reads the install location a package manifest declares, as reported by
``winget show``. Most manifests do not declare one, in which case the
caller falls back to a generic default.
"""

import logging
import re
import subprocess

from winprovision.utils.shell import command_exists, resolve_executable, run_command

logger = logging.getLogger(__name__)

_LOCATION_PATTERN = re.compile(r"^\s*(?:Default\s+)?Install\s*Location\s*:\s*(.+?)\s*$", re.IGNORECASE)


def lookup_install_location(identifier: str) -> str | None:
    """Look up the manifest install location for a winget package.

    Args:
        identifier: Winget package id.

    Returns:
        The declared install location, or None if unavailable.
    """
    if not command_exists("winget"):
        return None
    try:
        result = run_command(
            [
                resolve_executable("winget"),
                "show",
                "--id",
                identifier,
                "--exact",
                "--accept-source-agreements",
                "--disable-interactivity",
            ],
            timeout=60.0,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("winget show failed for %s: %s", identifier, e)
        return None

    if not result.success:
        return None
    return parse_install_location(result.stdout)


def parse_install_location(output: str) -> str | None:
    """Extract an install location from ``winget show`` output.

    Args:
        output: Text printed by ``winget show``.

    Returns:
        The location value, or None when the manifest declares none.
    """
    for line in output.splitlines():
        match = _LOCATION_PATTERN.match(line)
        if match:
            return match.group(1)
    return None
