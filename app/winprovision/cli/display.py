"""Shared Rich display functions for run summaries and probe results.

Provides reusable table builders and summary printers used by the
``run`` and ``status`` commands.
"""

from rich.markup import escape
from rich.table import Table

from winprovision.models.item import Item
from winprovision.models.outcome import RunSummary
from winprovision.utils.formatting import console, print_success

_KIND_STYLES = {
    "Success": "success",
    "Warning": "warning",
    "Error": "error",
}


def create_summary_table(summary: RunSummary) -> Table:
    """Create a Rich table with one row per phase.

    Args:
        summary: Summary produced by the outcome tracker.

    Returns:
        Rich Table with attempted/succeeded/warned/failed columns.
    """
    table = Table(
        title="Provisioning Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Phase", style="phase")
    table.add_column("Attempted", justify="right")
    table.add_column("Succeeded", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Errors", justify="right")

    for phase in summary.phases:
        table.add_row(
            phase.name,
            str(phase.attempted),
            f"[success]{phase.succeeded}[/success]",
            f"[warning]{phase.warned}[/warning]" if phase.warned else "0",
            f"[error]{phase.failed}[/error]" if phase.failed else "0",
        )
    return table


def format_detail(detail: str) -> str:
    """Colorize a "[Kind] text" detail line."""
    for label, style in _KIND_STYLES.items():
        prefix = f"[{label}]"
        if detail.startswith(prefix):
            return f"[{style}]{label}[/{style}] [muted]{escape(detail[len(prefix) :].strip())}[/muted]"
    return escape(detail)


def print_summary(summary: RunSummary) -> None:
    """Print the summary table and, when present, the detail lines.

    Args:
        summary: Summary produced by the outcome tracker.
    """
    if not summary.phases:
        console.print("[muted]No phases were run.[/muted]")
        return

    console.print(create_summary_table(summary))

    for phase in summary.phases:
        if not phase.details:
            continue
        console.print(f"\n[phase]{phase.name}[/phase]")
        for detail in phase.details:
            console.print(f"  {format_detail(detail)}", highlight=False)

    if summary.total_failed == 0 and summary.total_warned == 0:
        print_success("All phases completed successfully.")
    else:
        console.print(
            f"\n[warning]{summary.total_warned} warning(s)[/warning], "
            f"[error]{summary.total_failed} error(s)[/error]"
        )


def create_status_table(rows: list[tuple[Item, bool]]) -> Table:
    """Create a Rich table of probe results.

    Args:
        rows: Items with their installed flag.

    Returns:
        Rich Table with one row per item.
    """
    table = Table(
        title="Installed State",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Item", no_wrap=True)
    table.add_column("Provider", style="provider")
    table.add_column("Identifier", style="muted")
    table.add_column("Wanted")

    for item, installed in rows:
        icon = "[success]●[/]" if installed else "[muted]○[/]"
        table.add_row(
            icon,
            item.key,
            item.provider.value,
            item.resolved_identifier,
            item.desired_state.value,
        )
    return table
