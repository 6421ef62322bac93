"""Pruning domain models.

This module defines the data structures that flow through a run:
the frozen run configuration, the set of paths to preserve, the entries
produced by the scanner and the outcome accumulated by the executor.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from leave.core.errors import EntryError


class EntryKind(str, Enum):
    """Type of a directory entry, read without following symlinks.

    Attributes:
        FILE: Regular file.
        DIRECTORY: Directory.
        SYMLINK: Symbolic link, whatever it points to.
        OTHER: FIFO, socket, device node, ...
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class EntryStatus(str, Enum):
    """What happened to an entry during the run."""

    SKIPPED = "skipped"
    DELETED = "deleted"
    FAILED = "failed"


class RunState(str, Enum):
    """Phases of a single run."""

    VALIDATING = "validating"
    SCANNING = "scanning"
    FINALIZING = "finalizing"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable options for one run.

    Attributes:
        working_directory: Absolute, resolved directory whose children are pruned.
        targets: Preserve targets as given by the user, possibly relative.
        recursive: Delete directories with all their contents.
        allow_empty_dir_deletion: Delete directories that are empty.
        force: Skip the existence and empty-list checks.
        dry_run: Report deletions without performing them.
    """

    working_directory: Path
    targets: tuple[str, ...] = ()
    recursive: bool = False
    allow_empty_dir_deletion: bool = False
    force: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate run configuration after initialization."""
        if not self.working_directory.is_absolute():
            msg = f"Working directory must be absolute, got {self.working_directory}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PreserveSet:
    """Absolute paths that must survive the run.

    Every member is a direct child of ``working_directory``.
    """

    working_directory: Path
    paths: frozenset[Path] = frozenset()

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """A single child of the working directory.

    Attributes:
        name: File name of the entry.
        path: Absolute path of the entry.
        kind: Entry type, symlinks not followed.
    """

    name: str
    path: Path
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        """Whether the entry is a real directory (not a link to one)."""
        return self.kind == EntryKind.DIRECTORY


@dataclass(frozen=True, slots=True)
class EntryOutcome:
    """Result of processing one entry.

    Attributes:
        name: Entry name, or a placeholder when it could not be read.
        path: Absolute path of the entry, None when unknown.
        status: Skipped, deleted or failed.
        error: The recorded failure, None unless status is FAILED.
        dry_run: Whether the deletion was only simulated.
    """

    name: str
    path: Path | None
    status: EntryStatus
    error: EntryError | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate that failures carry an error and nothing else does."""
        if (self.status == EntryStatus.FAILED) != (self.error is not None):
            msg = "An error must be given exactly when the status is FAILED"
            raise ValueError(msg)


@dataclass(slots=True)
class RunOutcome:
    """Aggregate result of the deletion phase.

    Outcomes are kept in processing order. Nothing is rolled back when an
    entry fails; entries deleted before the failure stay deleted.
    """

    outcomes: list[EntryOutcome] = field(default_factory=list)

    def record(self, outcome: EntryOutcome) -> None:
        """Append the outcome of one entry."""
        self.outcomes.append(outcome)

    @property
    def deleted(self) -> list[EntryOutcome]:
        """Entries that were (or in dry-run mode would be) deleted."""
        return [o for o in self.outcomes if o.status == EntryStatus.DELETED]

    @property
    def skipped(self) -> list[EntryOutcome]:
        """Entries left in place because they are preserved."""
        return [o for o in self.outcomes if o.status == EntryStatus.SKIPPED]

    @property
    def failures(self) -> list[tuple[Path | None, EntryError]]:
        """Ordered (entry path, reason) pairs for every failed entry."""
        return [
            (o.path, o.error)
            for o in self.outcomes
            if o.status == EntryStatus.FAILED and o.error is not None
        ]

    @property
    def success(self) -> bool:
        """True when no entry failed."""
        return not any(o.status == EntryStatus.FAILED for o in self.outcomes)
