"""Logging setup.

Logs go to the console through Rich and to a log file. When the primary
log location is not writable, a file in the temp directory is used.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

from winprovision.core.paths import get_fallback_log_path, get_log_path
from winprovision.utils.formatting import err_console

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _open_file_handler(path: Path) -> logging.FileHandler | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> Path | None:
    """Configure the ``winprovision`` logger.

    Args:
        verbose: Show debug messages on the console.
        quiet: Only show errors on the console.
        log_file: Log file path. Defaults to the application log directory.

    Returns:
        Path of the log file in use, or None if no file could be opened.
    """
    logger = logging.getLogger("winprovision")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.INFO
    console_handler = RichHandler(
        console=err_console,
        level=console_level,
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    logger.addHandler(console_handler)

    used_path: Path | None = None
    for candidate in (log_file or get_log_path(), get_fallback_log_path()):
        file_handler = _open_file_handler(candidate)
        if file_handler is not None:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            logger.addHandler(file_handler)
            used_path = candidate
            break

    if used_path is None:
        logger.warning("No writable log file location; logging to console only")
    else:
        logger.debug("Logging to %s", used_path)
    return used_path
