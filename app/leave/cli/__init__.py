"""CLI package for leave.

This package contains the Typer application and its output helpers.
"""

from leave.cli.main import app

__all__ = ["app"]
