"""Main CLI application entry point.

Defines the Typer application: ``leave [OPTIONS] [FILES]...`` deletes
everything in the working directory except FILES.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from leave import __version__
from leave.cli.display import create_results_table, print_failures, print_summary
from leave.core.errors import FORCE_HINT, FatalRunError, MissingTargetsError
from leave.core.settings import SettingsError, load_settings
from leave.pruning.resolver import build_run_config
from leave.pruning.runner import prune
from leave.utils.formatting import console, err_console, print_error, print_warning

app = typer.Typer(
    name="leave",
    help="Delete everything in a directory except the given files.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"leave version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route the package's log records to stderr through Rich.

    Args:
        verbose: Log everything down to DEBUG.
        quiet: Only log errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    package_logger = logging.getLogger("leave")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    )
    package_logger.setLevel(level)


@app.command()
def main(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Files to leave present.", show_default=False),
    ] = None,
    chdir: Annotated[
        Path | None,
        typer.Option(
            "--chdir",
            "-C",
            metavar="DIR",
            help="Run as if started in DIR.",
        ),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Recursively delete directories."),
    ] = False,
    dirs: Annotated[
        bool,
        typer.Option("--dirs", "-d", help="Delete empty directories."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Continue even if some given files don't exist.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be deleted."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress non-essential output."),
    ] = False,
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
) -> None:
    """Delete everything in the working directory except FILES.

    Only the top level of the directory is touched. Directories are kept
    unless --dirs (empty ones) or --recursive (all) is given.

    Examples:
        leave README.md src          # Keep two entries, delete the rest
        leave -C build -r cache      # Prune ./build, keeping build/cache
        leave -n -d notes.txt        # Preview only
    """
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        config = build_run_config(
            files or [],
            chdir=chdir,
            recursive=recursive or settings.defaults.recursive,
            allow_empty_dir_deletion=dirs or settings.defaults.dirs,
            force=force,
            dry_run=dry_run,
        )
        outcome = prune(config)
    except FatalRunError as e:
        if isinstance(e, MissingTargetsError):
            for target in e.missing:
                print_warning(f"{target} doesn't exist.")
        print_error(f"{e} {FORCE_HINT}" if e.force_hint else str(e))
        raise typer.Exit(code=1) from e

    print_failures(outcome)

    if verbose and outcome.outcomes:
        console.print(create_results_table(outcome))
    if not quiet:
        print_summary(outcome, dry_run=dry_run)

    # Exit with error if any entry failed
    if not outcome.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
