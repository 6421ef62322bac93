"""leave - delete everything in a directory except the given files."""

__version__ = "0.1.0"
