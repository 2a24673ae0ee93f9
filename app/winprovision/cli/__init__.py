"""CLI package for winprovision.

This package contains the Typer application and all subcommands.
"""

from winprovision.cli.main import app

__all__ = ["app"]
