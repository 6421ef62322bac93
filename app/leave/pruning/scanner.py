"""Working directory scanner.

Lists the immediate children of the working directory, one at a time.
Nothing below the first level is visited.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from leave.core.errors import DirectoryListError, EntryReadError
from leave.pruning.models import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

ScanItem = DirectoryEntry | EntryReadError


def entry_kind(entry: os.DirEntry[str]) -> EntryKind:
    """Classify a directory entry without following symlinks.

    Raises:
        OSError: If the entry's type cannot be read.
    """
    if entry.is_symlink():
        return EntryKind.SYMLINK
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return EntryKind.FILE
    return EntryKind.OTHER


class DirectoryScanner:
    """Produces the entries of a single directory level.

    Args:
        working_directory: Absolute directory to list.
    """

    def __init__(self, working_directory: Path) -> None:
        self._working_directory = working_directory

    def scan(self) -> Iterator[ScanItem]:
        """Open the listing and return a one-shot iterator over it.

        The listing is opened immediately so that a directory that cannot be
        read fails the run before the first entry is requested. Entries come
        in platform listing order. An entry whose type cannot be read is
        yielded as an :class:`EntryReadError` and the scan goes on; if the
        listing itself breaks, one error is yielded and the iterator ends.

        Returns:
            Iterator of DirectoryEntry values and per-entry read errors.

        Raises:
            DirectoryListError: If the directory cannot be listed at all.
        """
        try:
            handle = os.scandir(self._working_directory)
        except OSError as e:
            raise DirectoryListError(
                f"Can't list contents of {self._working_directory}", cause=e
            ) from e
        return self._iter_entries(handle)

    def _iter_entries(self, handle: Iterator[os.DirEntry[str]]) -> Iterator[ScanItem]:
        with handle:  # type: ignore[attr-defined]
            while True:
                try:
                    entry = next(handle)
                except StopIteration:
                    return
                except OSError as e:
                    logger.debug("Directory listing broke off: %s", e)
                    yield EntryReadError("Can't read directory entry", cause=e)
                    return

                try:
                    kind = entry_kind(entry)
                except OSError as e:
                    yield EntryReadError(
                        f"Can't get type of {entry.name}", entry_name=entry.name, cause=e
                    )
                    continue

                yield DirectoryEntry(
                    name=entry.name,
                    path=self._working_directory / entry.name,
                    kind=kind,
                )
