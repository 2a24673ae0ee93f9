"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from winprovision import __version__
from winprovision.cli.commands import run, status, validate

# Create main Typer app
app = typer.Typer(
    name="winprovision",
    help="Declarative post-installation provisioning for Windows.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"winprovision version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output, including per-item details in the summary.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """winprovision - Declarative post-installation provisioning for Windows.

    Describe applications, fonts and bloatware in a JSON file and bring
    the machine to that state in one idempotent run.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(status.app, name="status")
app.add_typer(validate.app, name="validate")


if __name__ == "__main__":
    app()
