"""Core infrastructure for leave: errors, paths, settings and theming."""
