"""Run orchestration.

Wires the pipeline stages together: validate the preserve targets, scan
the working directory, remove what is not preserved. Validation finishes
before the first entry is read, so a fatal error never leaves partial
deletions behind.
"""

import logging

from leave.pruning.executor import RemovalExecutor
from leave.pruning.models import RunConfig, RunOutcome, RunState
from leave.pruning.scanner import DirectoryScanner
from leave.pruning.validator import validate

logger = logging.getLogger(__name__)


def _enter(state: RunState) -> None:
    logger.debug("Run state: %s", state.value)


def prune(config: RunConfig) -> RunOutcome:
    """Delete every entry of the working directory that is not preserved.

    Args:
        config: The run configuration.

    Returns:
        RunOutcome of the deletion phase. Per-entry failures are recorded
        in it rather than raised.

    Raises:
        FatalRunError: If validation fails or the directory cannot be
            listed. Nothing has been deleted in that case.
    """
    _enter(RunState.VALIDATING)
    preserve = validate(config)

    _enter(RunState.SCANNING)
    items = DirectoryScanner(config.working_directory).scan()
    executor = RemovalExecutor(
        preserve,
        recursive=config.recursive,
        allow_empty_dir_deletion=config.allow_empty_dir_deletion,
        dry_run=config.dry_run,
    )
    outcome = executor.run(items)

    _enter(RunState.FINALIZING)
    logger.debug(
        "Run finished: %d deleted, %d left, %d failed",
        len(outcome.deleted),
        len(outcome.skipped),
        len(outcome.failures),
    )
    return outcome
