"""Unit tests for cli/display.py.

Tests for the results table, the failure diagnostics and the summary line.
"""

import io
from pathlib import Path

import pytest
from leave.cli.display import create_results_table, print_failures, print_summary
from leave.core.errors import DirectoryNotEmptyError, EntryIsDirectoryError
from leave.core.theme import get_theme
from leave.pruning.models import EntryOutcome, EntryStatus, RunOutcome
from rich.console import Console

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mixed_outcome() -> RunOutcome:
    """An outcome with one kept, one deleted and one failed entry."""
    outcome = RunOutcome()
    outcome.record(EntryOutcome("keep.txt", Path("/w/keep.txt"), EntryStatus.SKIPPED))
    outcome.record(EntryOutcome("old.log", Path("/w/old.log"), EntryStatus.DELETED))
    outcome.record(
        EntryOutcome(
            "build",
            Path("/w/build"),
            EntryStatus.FAILED,
            error=DirectoryNotEmptyError().wrap("Can't remove build"),
        )
    )
    return outcome


def _capture_console_output(func: object, *args: object, **kwargs: object) -> str:
    """Capture Rich console output by temporarily replacing both consoles."""
    import leave.cli.display as display_mod
    import leave.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, soft_wrap=True)

    originals = (display_mod.console, fmt_mod.console, fmt_mod.err_console)
    display_mod.console = test_console
    fmt_mod.console = test_console
    fmt_mod.err_console = test_console
    try:
        func(*args, **kwargs)  # type: ignore[operator]
    finally:
        display_mod.console, fmt_mod.console, fmt_mod.err_console = originals

    return buf.getvalue()


def _render(table: object) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=120).print(table)
    return buf.getvalue()


# ===========================================================================
# create_results_table
# ===========================================================================


class TestCreateResultsTable:
    """Tests for create_results_table."""

    def test_has_columns(self, mixed_outcome: RunOutcome) -> None:
        """Table has Status, Entry and Message columns."""
        table = create_results_table(mixed_outcome)
        assert [col.header for col in table.columns] == ["Status", "Entry", "Message"]

    def test_one_row_per_entry(self, mixed_outcome: RunOutcome) -> None:
        """Every outcome becomes a row."""
        assert create_results_table(mixed_outcome).row_count == 3

    def test_row_content(self, mixed_outcome: RunOutcome) -> None:
        """Rows show the status label, name and failure message."""
        output = _render(create_results_table(mixed_outcome))

        assert "KEEP" in output
        assert "DEL" in output
        assert "FAIL" in output
        assert "Can't remove build: Directory is not empty" in output

    def test_dry_run_rows(self) -> None:
        """Simulated deletions are labelled DRY."""
        outcome = RunOutcome()
        outcome.record(EntryOutcome("a", Path("/w/a"), EntryStatus.DELETED, dry_run=True))

        output = _render(create_results_table(outcome))

        assert "DRY" in output
        assert "would be deleted" in output

    def test_names_with_brackets(self) -> None:
        """Entry names are not interpreted as markup."""
        outcome = RunOutcome()
        outcome.record(EntryOutcome("[bold]x", Path("/w/[bold]x"), EntryStatus.DELETED))

        assert "[bold]x" in _render(create_results_table(outcome))


# ===========================================================================
# print_failures / print_summary
# ===========================================================================


class TestPrintFailures:
    """Tests for print_failures."""

    def test_one_line_per_failure(self) -> None:
        """Each failure is printed in order with its context chain."""
        outcome = RunOutcome()
        for name in ("d1", "d2"):
            outcome.record(
                EntryOutcome(
                    name,
                    Path("/w") / name,
                    EntryStatus.FAILED,
                    error=EntryIsDirectoryError().wrap(f"Can't remove {name}"),
                )
            )

        output = _capture_console_output(print_failures, outcome)

        assert output.splitlines() == [
            "Error: Can't remove d1: Is a directory",
            "Error: Can't remove d2: Is a directory",
        ]

    def test_nothing_for_success(self) -> None:
        """A clean run prints nothing."""
        assert _capture_console_output(print_failures, RunOutcome()) == ""


class TestPrintSummary:
    """Tests for print_summary."""

    def test_counts(self) -> None:
        """The summary counts deleted and kept entries."""
        outcome = RunOutcome()
        outcome.record(EntryOutcome("a", Path("/w/a"), EntryStatus.DELETED))
        outcome.record(EntryOutcome("b", Path("/w/b"), EntryStatus.SKIPPED))

        output = _capture_console_output(print_summary, outcome)

        assert "Deleted 1 entry, left 1." in output

    def test_dry_run_wording(self) -> None:
        """Dry-run summaries use conditional wording."""
        outcome = RunOutcome()
        outcome.record(EntryOutcome("a", Path("/w/a"), EntryStatus.DELETED, dry_run=True))
        outcome.record(EntryOutcome("b", Path("/w/b"), EntryStatus.DELETED, dry_run=True))

        output = _capture_console_output(print_summary, outcome, dry_run=True)

        assert "Would delete 2 entries, leaving 0." in output

    def test_failures_counted(self, mixed_outcome: RunOutcome) -> None:
        """Failed entries are appended to the summary."""
        output = _capture_console_output(print_summary, mixed_outcome)

        assert "Deleted 1 entry, left 1. 1 failed" in output
