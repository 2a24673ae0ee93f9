"""CLI commands for winprovision.

This package contains all subcommand implementations.
"""

from winprovision.cli.commands import run, status, validate

__all__ = ["run", "status", "validate"]
