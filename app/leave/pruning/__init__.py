"""Selective deletion of a single directory level.

This module provides the pipeline that resolves run options, validates
the preserve targets, scans the working directory and removes every
entry that is not preserved.
"""

from leave.pruning.executor import RemovalExecutor
from leave.pruning.models import (
    DirectoryEntry,
    EntryKind,
    EntryOutcome,
    EntryStatus,
    PreserveSet,
    RunConfig,
    RunOutcome,
    RunState,
)
from leave.pruning.resolver import build_run_config, resolve_working_directory
from leave.pruning.runner import prune
from leave.pruning.scanner import DirectoryScanner
from leave.pruning.validator import validate

__all__ = [
    "DirectoryEntry",
    "DirectoryScanner",
    "EntryKind",
    "EntryOutcome",
    "EntryStatus",
    "PreserveSet",
    "RemovalExecutor",
    "RunConfig",
    "RunOutcome",
    "RunState",
    "build_run_config",
    "prune",
    "resolve_working_directory",
    "validate",
]
