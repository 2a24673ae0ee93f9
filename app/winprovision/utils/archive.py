"""Zip archive extraction."""

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when an archive cannot be extracted."""


def extract_zip(archive: Path, destination: Path) -> Path:
    """Extract a zip archive into a directory.

    Members that would escape ``destination`` are rejected.

    Args:
        archive: Path to the zip file.
        destination: Directory to extract into. Created if missing.

    Returns:
        The destination directory.

    Raises:
        ArchiveError: If the archive is corrupt, unsafe, or unreadable.
    """
    destination.mkdir(parents=True, exist_ok=True)
    root = destination.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            for member in zf.namelist():
                target = (root / member).resolve()
                if target != root and root not in target.parents:
                    msg = f"Unsafe path in archive {archive.name}: {member}"
                    raise ArchiveError(msg)
            zf.extractall(root)
    except zipfile.BadZipFile as e:
        msg = f"Invalid zip archive {archive}: {e}"
        raise ArchiveError(msg) from e
    except OSError as e:
        msg = f"Failed to extract {archive}: {e}"
        raise ArchiveError(msg) from e

    logger.debug("Extracted %s to %s", archive, destination)
    return destination
