"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

Tree = dict[str, Any]


def populate(directory: Path, tree: Tree) -> None:
    """Create a directory structure from a nested dict.

    ``None`` values create empty files, dict values create directories
    (recursively) and string values create symlinks pointing at the string.
    """
    for name, value in tree.items():
        path = directory / name
        if value is None:
            path.write_text("")
        elif isinstance(value, dict):
            path.mkdir()
            populate(path, value)
        elif isinstance(value, str):
            path.symlink_to(value)
        else:
            msg = f"Unsupported tree value for {name}: {value!r}"
            raise TypeError(msg)


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Tree], Path]:
    """Factory building a test directory from a nested dict."""

    def _make(tree: Tree) -> Path:
        root = tmp_path / "work"
        root.mkdir()
        populate(root, tree)
        return root

    return _make


@pytest.fixture
def names() -> Callable[[Path], set[str]]:
    """Return a function listing the names of a directory's immediate children."""

    def _names(directory: Path) -> set[str]:
        return {p.name for p in directory.iterdir()}

    return _names
