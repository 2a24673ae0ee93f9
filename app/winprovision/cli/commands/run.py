"""Run command implementation.

Drives the enabled provisioning phases and prints the end-of-run summary.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from winprovision.cli.display import print_summary
from winprovision.core.config import require_config
from winprovision.core.logs import setup_logging
from winprovision.core.paths import ensure_temp_root
from winprovision.core.phases import run_provisioning
from winprovision.core.tracker import OutcomeTracker
from winprovision.utils.elevation import is_admin
from winprovision.utils.formatting import print_error, print_info, print_warning

app = typer.Typer(
    help="Provision this machine from the configuration.",
    invoke_without_command=True,
)


class PhaseChoice(str, Enum):
    """Phases that can be skipped from the command line."""

    DEBLOAT = "debloat"
    FONTS = "fonts"
    APPS = "apps"
    CLEANUP = "cleanup"


@app.callback(invoke_without_command=True)
def run_phases(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the JSON configuration file.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without changing the system.",
        ),
    ] = False,
    skip: Annotated[
        list[PhaseChoice] | None,
        typer.Option(
            "--skip",
            "-s",
            help="Phase to skip (repeatable): debloat, fonts, apps, cleanup.",
            case_sensitive=False,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write the log to this file instead of the default location.",
        ),
    ] = None,
) -> None:
    """Run the provisioning phases.

    Phases run in order: debloat, fonts, apps, cleanup. Each item is
    resolved independently; a failure never stops the remaining items.

    Examples:
        winprovision run                          # Use the default configuration
        winprovision run -c setup.json            # Use a specific file
        winprovision run --dry-run                # Simulate all phases
        winprovision run --skip debloat           # Leave preinstalled apps alone
    """
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj or {}
    verbose = bool(obj.get("verbose", False))
    quiet = bool(obj.get("quiet", False))

    used_log = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    config = require_config(config_path)

    if not dry_run and not is_admin():
        print_warning("Not running as administrator; installs and removals may fail.")

    try:
        temp_root = ensure_temp_root()
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if dry_run:
        print_info("Dry-run mode: no changes will be made.")

    tracker = OutcomeTracker()
    run_provisioning(
        config,
        tracker,
        dry_run=dry_run,
        skip=[phase.value for phase in skip or []],
        temp_root=temp_root,
    )

    print_summary(tracker.summarize(verbose=verbose))
    if used_log is not None and not quiet:
        print_info(f"Log written to {used_log}")

    if tracker.has_errors:
        raise typer.Exit(code=1)
