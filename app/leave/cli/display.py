"""Rich display functions for run outcomes.

Provides the failure diagnostics, the optional per-entry results table
and the closing summary line printed after a run.
"""

from rich.markup import escape
from rich.table import Table

from leave.pruning.models import EntryStatus, RunOutcome
from leave.utils.formatting import console, print_error, print_success


def print_failures(outcome: RunOutcome) -> None:
    """Print one error line per failed entry, in processing order.

    Args:
        outcome: Outcome of the run.
    """
    for _, error in outcome.failures:
        print_error(str(error))


def create_results_table(outcome: RunOutcome) -> Table:
    """Create a Rich table listing what happened to every entry.

    Args:
        outcome: Outcome of the run.

    Returns:
        Rich Table with Status, Entry and Message columns.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Entry", no_wrap=True)
    table.add_column("Message")

    for entry in outcome.outcomes:
        if entry.status == EntryStatus.DELETED:
            status = "[deleted]DRY[/deleted]" if entry.dry_run else "[deleted]DEL[/deleted]"
            message = "would be deleted" if entry.dry_run else ""
        elif entry.status == EntryStatus.SKIPPED:
            status = "[kept]KEEP[/kept]"
            message = ""
        else:
            status = "[failed]FAIL[/failed]"
            message = str(entry.error) if entry.error else "Unknown error"

        table.add_row(status, escape(entry.name), f"[muted]{escape(message)}[/muted]")

    return table


def print_summary(outcome: RunOutcome, dry_run: bool = False) -> None:
    """Print a one-line summary of the run.

    Args:
        outcome: Outcome of the run.
        dry_run: Whether nothing was actually deleted.
    """
    deleted = len(outcome.deleted)
    kept = len(outcome.skipped)
    failed = len(outcome.failures)
    noun = "entry" if deleted == 1 else "entries"

    if dry_run:
        message = f"Would delete {deleted} {noun}, leaving {kept}."
    else:
        message = f"Deleted {deleted} {noun}, left {kept}."

    if failed == 0:
        print_success(message)
    else:
        console.print(f"\n{escape(message)} [error]{failed} failed[/error]")
