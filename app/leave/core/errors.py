"""Structured errors for leave.

Every error raised by the pruning pipeline is a :class:`LeaveError`: an
ordered list of context messages (outermost first) plus the root cause
kind and, when the failure came from the operating system, the original
``OSError``. Rendering joins the chain with colons, e.g.
``Can't remove build: Directory is not empty``.

Errors are split into two families:

- :class:`FatalRunError` aborts the whole run before anything is deleted.
- :class:`EntryError` is caught at the entry boundary and recorded in the
  run outcome while the scan continues.
"""

from __future__ import annotations

import errno
import os
from enum import Enum
from typing import Self

FORCE_HINT = "To continue anyways, use -f/--force."


class ErrorKind(str, Enum):
    """Root cause classification of a :class:`LeaveError`."""

    ENVIRONMENT = "environment"
    EMPTY_TARGET_LIST = "empty_target_list"
    MISSING_TARGETS = "missing_targets"
    TARGET_CHECK = "target_check"
    OUTSIDE_WORKING_DIRECTORY = "outside_working_directory"
    DIRECTORY_LIST = "directory_list"
    ENTRY_READ = "entry_read"
    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    IS_A_DIRECTORY = "is_a_directory"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    IO = "io"


_ERRNO_KINDS: dict[int, ErrorKind] = {
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.ENOTEMPTY: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.EISDIR: ErrorKind.IS_A_DIRECTORY,
}


def describe_os_error(error: OSError) -> str:
    """Return the bare OS description of an error, without the filename.

    ``str(OSError)`` embeds the errno and path, which would repeat what the
    surrounding context already says.
    """
    if error.errno is not None:
        return os.strerror(error.errno)
    return str(error) or type(error).__name__


class LeaveError(Exception):
    """Base error carrying an ordered chain of context messages.

    Attributes:
        kind: Root cause classification.
        contexts: Context messages, outermost first.
        cause: Underlying OS error, if any.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: OSError | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        super().__init__(message or "")
        self.contexts: list[str] = [message] if message else []
        self.cause = cause
        if kind is not None:
            self.kind = kind
        elif self.kind is ErrorKind.IO and cause is not None and cause.errno in _ERRNO_KINDS:
            # Only generic errors take their kind from the OS cause
            self.kind = _ERRNO_KINDS[cause.errno]

    def wrap(self, context: str) -> Self:
        """Prepend an outer context message and return the same error."""
        self.contexts.insert(0, context)
        return self

    def chain(self) -> list[str]:
        """Return all messages from the outermost context to the root cause."""
        messages = list(self.contexts)
        if self.cause is not None:
            messages.append(describe_os_error(self.cause))
        return messages

    def __str__(self) -> str:
        return ": ".join(self.chain())


# =============================================================================
# Fatal errors: abort the run before any deletion
# =============================================================================


class FatalRunError(LeaveError):
    """Base class for errors that abort the whole run.

    Attributes:
        force_hint: Whether ``--force`` would bypass this error. The CLI then
            follows the message with :data:`FORCE_HINT`.
    """

    force_hint: bool = False


class EnvironmentSetupError(FatalRunError):
    """Raised when the working directory cannot be used."""

    kind = ErrorKind.ENVIRONMENT


class EmptyTargetListError(FatalRunError):
    """Raised when no preserve targets are given without ``--force``."""

    kind = ErrorKind.EMPTY_TARGET_LIST
    force_hint = True

    def __init__(self) -> None:
        super().__init__(
            "No files to leave were given, so everything would be deleted. "
            "This is likely a mistake."
        )


class MissingTargetsError(FatalRunError):
    """Raised when one or more preserve targets do not exist.

    Attributes:
        missing: The targets that were not found, in the order given.
    """

    kind = ErrorKind.MISSING_TARGETS
    force_hint = True

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            "One or more provided files don't exist. "
            "This is likely a mistake."
        )
        self.missing = missing


class TargetCheckError(FatalRunError):
    """Raised when the existence of a preserve target cannot be determined."""

    kind = ErrorKind.TARGET_CHECK


class OutsideWorkingDirectoryError(FatalRunError):
    """Raised when a preserve target is not a direct child of the working directory.

    Attributes:
        target: The offending target as given by the user.
    """

    kind = ErrorKind.OUTSIDE_WORKING_DIRECTORY

    def __init__(self, target: str, working_directory: str) -> None:
        super().__init__(
            f"{target} is not directly inside {working_directory}, "
            "so it can't be left in place. This is likely a mistake."
        )
        self.target = target


class DirectoryListError(FatalRunError):
    """Raised when the working directory listing cannot be opened."""

    kind = ErrorKind.DIRECTORY_LIST


# =============================================================================
# Per-entry errors: recorded, the scan continues
# =============================================================================


class EntryError(LeaveError):
    """Base class for failures scoped to a single directory entry."""


class EntryReadError(EntryError):
    """Raised when an entry's metadata cannot be read.

    Attributes:
        entry_name: Name of the entry, None if the listing itself broke.
    """

    kind = ErrorKind.ENTRY_READ

    def __init__(
        self,
        message: str,
        *,
        entry_name: str | None = None,
        cause: OSError | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.entry_name = entry_name


class EntryRemovalError(EntryError):
    """Raised when deleting an entry fails at the OS level."""


class DirectoryNotEmptyError(EntryError):
    """Raised when a non-empty directory would need recursive deletion."""

    kind = ErrorKind.DIRECTORY_NOT_EMPTY

    def __init__(self) -> None:
        super().__init__("Directory is not empty")


class EntryIsDirectoryError(EntryError):
    """Raised when a directory is met and no directory deletion is enabled."""

    kind = ErrorKind.IS_A_DIRECTORY

    def __init__(self) -> None:
        super().__init__("Is a directory")
