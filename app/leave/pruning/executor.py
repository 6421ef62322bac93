"""Removal of scanned entries.

Applies the deletion policy to each entry coming out of the scanner and
folds the per-entry results into a :class:`RunOutcome`. A failing entry
never stops the run; the next entry is processed as usual.

Directory policy, in order of precedence:

1. ``recursive``: remove the directory and everything in it.
2. ``allow_empty_dir_deletion``: remove the directory only if it is empty.
3. Otherwise directories are refused.

Files, symlinks and other entry types are unlinked. Symlinks are removed
as links and never followed.
"""

import logging
import os
import shutil
from collections.abc import Iterable

from leave.core.errors import (
    DirectoryNotEmptyError,
    EntryError,
    EntryIsDirectoryError,
    EntryReadError,
    EntryRemovalError,
)
from leave.pruning.models import (
    DirectoryEntry,
    EntryOutcome,
    EntryStatus,
    PreserveSet,
    RunOutcome,
)
from leave.pruning.scanner import ScanItem

logger = logging.getLogger(__name__)

UNREADABLE_ENTRY = "<unreadable entry>"


class RemovalExecutor:
    """Deletes every scanned entry that is not preserved.

    Args:
        preserve: Paths to leave in place.
        recursive: Delete directories with their contents.
        allow_empty_dir_deletion: Delete empty directories.
        dry_run: Evaluate the policy but do not touch the filesystem.
    """

    def __init__(
        self,
        preserve: PreserveSet,
        *,
        recursive: bool = False,
        allow_empty_dir_deletion: bool = False,
        dry_run: bool = False,
    ) -> None:
        self._preserve = preserve
        self._recursive = recursive
        self._allow_empty_dir_deletion = allow_empty_dir_deletion
        self._dry_run = dry_run

    def run(self, items: Iterable[ScanItem]) -> RunOutcome:
        """Process all scanned items and return the aggregate outcome.

        Args:
            items: Entries and read errors, as produced by the scanner.

        Returns:
            RunOutcome with one EntryOutcome per item, in order.
        """
        outcome = RunOutcome()
        for item in items:
            outcome.record(self.process(item))
        return outcome

    def process(self, item: ScanItem) -> EntryOutcome:
        """Process a single scanned item.

        Per-entry errors are converted into a FAILED outcome here and do
        not propagate.
        """
        if isinstance(item, EntryReadError):
            name = item.entry_name or UNREADABLE_ENTRY
            path = self._preserve.working_directory / item.entry_name if item.entry_name else None
            if path is not None and path in self._preserve:
                # Preserved entries are left alone, readable or not
                logger.debug("Leaving %s", name)
                return EntryOutcome(name=name, path=path, status=EntryStatus.SKIPPED)
            logger.debug("Recording read failure for %s", name)
            return EntryOutcome(name=name, path=path, status=EntryStatus.FAILED, error=item)

        if item.path in self._preserve:
            logger.debug("Leaving %s", item.name)
            return EntryOutcome(name=item.name, path=item.path, status=EntryStatus.SKIPPED)

        try:
            self._remove(item)
        except EntryError as e:
            e.wrap(f"Can't remove {item.name}")
            logger.debug("Failed to remove %s: %s", item.name, e)
            return EntryOutcome(name=item.name, path=item.path, status=EntryStatus.FAILED, error=e)

        if self._dry_run:
            logger.info("Dry-run: would delete %s", item.path)
        else:
            logger.info("Deleted %s", item.path)
        return EntryOutcome(
            name=item.name,
            path=item.path,
            status=EntryStatus.DELETED,
            dry_run=self._dry_run,
        )

    def _remove(self, entry: DirectoryEntry) -> None:
        """Delete one entry according to its kind and the directory policy.

        Raises:
            EntryError: If the entry must not or could not be deleted.
        """
        if entry.is_dir:
            self._remove_directory(entry)
            return

        if self._dry_run:
            return
        try:
            os.unlink(entry.path)
        except OSError as e:
            raise EntryRemovalError(cause=e) from e

    def _remove_directory(self, entry: DirectoryEntry) -> None:
        if self._recursive:
            if self._dry_run:
                return
            try:
                shutil.rmtree(entry.path)
            except OSError as e:
                # The tree may be partially removed at this point
                context = f"Can't delete {e.filename}" if e.filename else None
                raise EntryRemovalError(context, cause=e) from e
            return

        if not self._allow_empty_dir_deletion:
            raise EntryIsDirectoryError()

        if not self._is_empty_directory(entry):
            raise DirectoryNotEmptyError()
        if self._dry_run:
            return
        try:
            os.rmdir(entry.path)
        except OSError as e:
            raise EntryRemovalError(cause=e) from e

    @staticmethod
    def _is_empty_directory(entry: DirectoryEntry) -> bool:
        """Check whether a directory has no entries.

        Raises:
            EntryRemovalError: If the directory cannot be listed.
        """
        try:
            with os.scandir(entry.path) as it:
                return next(it, None) is None
        except OSError as e:
            raise EntryRemovalError(f"Can't list contents of {entry.name}", cause=e) from e
