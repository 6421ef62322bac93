"""Preflight validation of preserve targets.

Two gates run before anything is deleted, and either one aborts the
whole run:

- Existence: every target must exist, and at least one must be given.
  A typo in a file name would otherwise delete the file the user meant
  to keep. Skipped with ``--force``.
- Containment: every target must be a direct child of the working
  directory. Anything else lies outside the pruning scope and would not
  be protected. Never skipped.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from leave.core.errors import (
    EmptyTargetListError,
    MissingTargetsError,
    OutsideWorkingDirectoryError,
    TargetCheckError,
)
from leave.pruning.models import PreserveSet, RunConfig

logger = logging.getLogger(__name__)


def absolute_target(target: str, working_directory: Path) -> Path:
    """Make a preserve target absolute without following symlinks.

    The path is normalized lexically, so ``x``, ``./x`` and ``././x``
    all map to the same path.

    Args:
        target: Target as given by the user.
        working_directory: Absolute directory relative targets refer to.

    Returns:
        Absolute, normalized path.
    """
    return Path(os.path.normpath(working_directory / target))


def find_missing_targets(targets: Sequence[str], working_directory: Path) -> list[str]:
    """Return the targets that do not exist.

    A dangling symlink counts as existing: it is an entry that can be kept.

    Raises:
        TargetCheckError: If existence cannot be determined for a target.
    """
    missing: list[str] = []
    for target in targets:
        try:
            os.lstat(working_directory / target)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Preserve target %s does not exist", target)
            missing.append(target)
        except OSError as e:
            raise TargetCheckError(f"Can't check if {target} exists", cause=e) from e
    return missing


def check_existence(targets: Sequence[str], working_directory: Path) -> None:
    """Run the existence gate.

    Raises:
        EmptyTargetListError: If no targets were given.
        MissingTargetsError: If any target does not exist.
        TargetCheckError: If existence cannot be determined for a target.
    """
    if not targets:
        raise EmptyTargetListError()

    missing = find_missing_targets(targets, working_directory)
    if missing:
        raise MissingTargetsError(missing)


def check_containment(targets: Sequence[str], working_directory: Path) -> frozenset[Path]:
    """Run the containment gate.

    Only direct children qualify: ``a/b`` is rejected even when ``a`` is
    itself preserved, and so is the working directory itself.

    Returns:
        The absolute paths of all targets.

    Raises:
        OutsideWorkingDirectoryError: For the first target that is not a
            direct child of the working directory.
    """
    paths: set[Path] = set()
    for target in targets:
        path = absolute_target(target, working_directory)
        if path == working_directory or path.parent != working_directory:
            raise OutsideWorkingDirectoryError(target, str(working_directory))
        paths.add(path)
    return frozenset(paths)


def validate(config: RunConfig) -> PreserveSet:
    """Run both preflight gates and build the preserve set.

    Args:
        config: The run configuration.

    Returns:
        PreserveSet of absolute paths, all direct children of the
        working directory.

    Raises:
        FatalRunError: If either gate fails. Nothing has been deleted.
    """
    if config.force:
        logger.debug("Force mode: skipping existence checks")
    else:
        check_existence(config.targets, config.working_directory)

    paths = check_containment(config.targets, config.working_directory)
    logger.debug("Preserving %d entr%s", len(paths), "y" if len(paths) == 1 else "ies")
    return PreserveSet(working_directory=config.working_directory, paths=paths)
