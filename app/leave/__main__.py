"""Allow running leave as ``python -m leave``."""

from leave.cli.main import app

app(prog_name="leave")
