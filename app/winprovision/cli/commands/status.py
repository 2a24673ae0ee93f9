"""Status command implementation.

Probes every configured application and shows whether it is present,
without changing anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from winprovision.cli.display import create_status_table
from winprovision.core.config import require_config
from winprovision.core.fonts import FontDetector
from winprovision.models.item import Item
from winprovision.probes import get_probe
from winprovision.utils.formatting import console, print_info

app = typer.Typer(
    help="Show the installed state of configured items.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_status(
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
    """Probe configured applications and fonts.

    Examples:
        winprovision status
        winprovision status -c setup.json
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path)
    items: list[Item] = [*config.removal_items(), *config.install_items()]

    if not items:
        print_info("No applications configured.")
    else:
        rows = [(item, get_probe(item.provider).is_installed(item)) for item in items]
        console.print(create_status_table(rows))

    fonts = config.nerd_fonts
    if fonts is not None:
        detector = FontDetector()
        for font in fonts.fonts:
            state = "[success]installed[/]" if detector.is_installed(font) else "[muted]missing[/]"
            console.print(f"Font {font}: {state}")
