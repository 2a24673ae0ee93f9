"""Configuration file I/O.

This module loads the JSON configuration and validates it with the
Pydantic models.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from winprovision.core.paths import get_config_path
from winprovision.models.config import ProvisionConfig


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid JSON."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def load_config(path: Path | None = None) -> ProvisionConfig:
    """Load and validate a configuration file.

    Args:
        path: Path to the configuration file. If None, uses the default path.

    Returns:
        Validated ProvisionConfig object.

    Raises:
        ConfigNotFoundError: If the file doesn't exist.
        ConfigParseError: If the JSON syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Configuration not found: {config_path}")

    try:
        # utf-8-sig tolerates the BOM that Windows editors like to add
        with open(config_path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read configuration: {e}") from e

    try:
        return ProvisionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration content: {e}") from e


def require_config(config_path: Path | None = None) -> ProvisionConfig:
    """Load the configuration or exit with a helpful error message.

    Args:
        config_path: Optional custom configuration path.

    Returns:
        Loaded and validated ProvisionConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from winprovision.utils.formatting import print_error, print_info

    path = config_path or get_config_path()
    try:
        return load_config(path)
    except ConfigNotFoundError as e:
        print_error(f"Configuration not found: {path}")
        print_info("Pass --config <file> or create the default configuration file.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load configuration: {e}")
        raise typer.Exit(code=1) from e
