"""Path management for winprovision.

This module provides standardized Windows paths for configuration,
logs, temporary work, fonts, and default install locations.

Defaults:
- Config: %LOCALAPPDATA%/winprovision/
- Logs: %LOCALAPPDATA%/winprovision/logs/
- Temp: %TEMP%/winprovision/
"""

import os
import tempfile
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "winprovision"


def _expand(value: str) -> str:
    """Expand environment variables and the user home in a path string."""
    return os.path.expanduser(os.path.expandvars(value))


def expand_path(value: str) -> Path:
    """Expand ``%VAR%``/``$VAR`` references and ``~`` in a configured path.

    Args:
        value: Path string from the configuration.

    Returns:
        Expanded Path.
    """
    return Path(_expand(value))


def get_data_dir() -> Path:
    """Get the application data directory.

    Returns:
        Path to %LOCALAPPDATA%/winprovision, or ~/.local/share/winprovision
        when LOCALAPPDATA is not set.
    """
    base = os.environ.get("LOCALAPPDATA")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to %LOCALAPPDATA%/winprovision/config.json.
    """
    return get_data_dir() / "config.json"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to %LOCALAPPDATA%/winprovision/theme.toml.
    """
    return get_data_dir() / "theme.toml"


def get_log_path() -> Path:
    """Get the primary log file path.

    Returns:
        Path to %LOCALAPPDATA%/winprovision/logs/winprovision.log.
    """
    return get_data_dir() / "logs" / f"{APP_NAME}.log"


def get_fallback_log_path() -> Path:
    """Get the log file used when the primary location is not writable.

    Returns:
        Path to %TEMP%/winprovision.log.
    """
    return Path(tempfile.gettempdir()) / f"{APP_NAME}.log"


def get_temp_root() -> Path:
    """Get the root directory for per-item temporary work.

    Returns:
        Path to %TEMP%/winprovision.
    """
    return Path(tempfile.gettempdir()) / APP_NAME


def ensure_temp_root() -> Path:
    """Create the temporary work root if it doesn't exist.

    Returns:
        Path to the temp root.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_temp_root()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create temp directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def get_fonts_dir() -> Path:
    """Get the system font directory.

    Returns:
        Path to %WINDIR%/Fonts.
    """
    return Path(os.environ.get("WINDIR", r"C:\Windows")) / "Fonts"


def get_default_install_dir(name: str) -> str:
    """Get the generic default install location for an application.

    Used when an automatic location lookup yields nothing.

    Args:
        name: Application name used as the folder name.

    Returns:
        Path string under %ProgramFiles%.
    """
    program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
    return str(Path(program_files) / name)
