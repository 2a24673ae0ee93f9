"""Validate command implementation.

Checks that the configuration file parses and matches the schema.
"""

from pathlib import Path
from typing import Annotated

import typer

from winprovision.core.config import require_config
from winprovision.utils.formatting import print_info, print_success, print_warning

app = typer.Typer(
    help="Validate the configuration file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def validate_config(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the JSON configuration file.",
        ),
    ] = None,
) -> None:
    """Validate the configuration and summarize what a run would do."""
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path)
    installs = config.install_items()
    removals = config.removal_items()
    fonts = config.nerd_fonts

    print_success("Configuration is valid.")
    print_info(f"{len(installs)} app(s) to install, {len(removals)} app(s) to remove")
    for message in [*config.removal_errors(), *config.install_errors()]:
        print_warning(f"Entry will be recorded as an error: {message}")
    if fonts is not None:
        print_info(f"{len(fonts.fonts)} font(s) requested: {', '.join(fonts.fonts)}")

    disabled = [name for name, enabled in config.phases.model_dump().items() if not enabled]
    if disabled:
        print_info(f"Disabled phases: {', '.join(disabled)}")
