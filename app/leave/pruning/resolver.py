"""Options resolution.

Turns parsed command-line input into a frozen :class:`RunConfig`. The
working directory override is resolved to an absolute path here and then
passed explicitly to every later stage; the process-wide current
directory is never changed.
"""

import errno
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from leave.core.errors import EnvironmentSetupError
from leave.pruning.models import RunConfig

logger = logging.getLogger(__name__)


def _os_error(code: int, path: Path) -> OSError:
    return OSError(code, os.strerror(code), str(path))


def resolve_working_directory(chdir: Path | None = None, base: Path | None = None) -> Path:
    """Resolve the directory whose entries will be pruned.

    Args:
        chdir: Optional override, relative paths are taken against ``base``.
        base: Directory to resolve against. Defaults to the process cwd.

    Returns:
        Absolute path with symlinks resolved.

    Raises:
        EnvironmentSetupError: If the directory does not exist, is not a
            directory, or cannot be searched.
    """
    label = f"Can't chdir into {chdir}" if chdir is not None else "Can't use current directory"

    try:
        base_dir = base if base is not None else Path.cwd()
        resolved = (base_dir / chdir if chdir is not None else base_dir).resolve(strict=True)
    except OSError as e:
        raise EnvironmentSetupError(label, cause=e) from e

    if not resolved.is_dir():
        raise EnvironmentSetupError(label, cause=_os_error(errno.ENOTDIR, resolved))
    if not os.access(resolved, os.X_OK):
        raise EnvironmentSetupError(label, cause=_os_error(errno.EACCES, resolved))

    logger.debug("Working directory resolved to %s", resolved)
    return resolved


def build_run_config(
    targets: Sequence[str | Path],
    *,
    chdir: Path | None = None,
    base: Path | None = None,
    recursive: bool = False,
    allow_empty_dir_deletion: bool = False,
    force: bool = False,
    dry_run: bool = False,
) -> RunConfig:
    """Build the immutable configuration for one run.

    Args:
        targets: Names to preserve, relative to the working directory.
        chdir: Working directory override (``-C``).
        base: Directory ``chdir`` is relative to. Defaults to the process cwd.
        recursive: Delete directories recursively.
        allow_empty_dir_deletion: Delete empty directories.
        force: Skip the existence and empty-list checks.
        dry_run: Report deletions without performing them.

    Returns:
        Frozen RunConfig.

    Raises:
        EnvironmentSetupError: If the working directory is unusable.
    """
    return RunConfig(
        working_directory=resolve_working_directory(chdir, base),
        targets=tuple(str(t) for t in targets),
        recursive=recursive,
        allow_empty_dir_deletion=allow_empty_dir_deletion,
        force=force,
        dry_run=dry_run,
    )
