"""Action ordering and dispatch.

Orders configured entries so that an archive of a tree always runs
before anything that deletes from it, then dispatches the entries one
at a time to the matching directory operation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path, PurePath

from dirkeeper.core.config import ConfigValidationError
from dirkeeper.filesystem.archiver import ArchiveJob, ArchiveOperation
from dirkeeper.filesystem.base import DirectoryOperation, EventCallback
from dirkeeper.filesystem.errors import OperationError
from dirkeeper.filesystem.listing import EnumerateOperation
from dirkeeper.filesystem.measure import MeasureOperation
from dirkeeper.filesystem.purge import PurgeOperation
from dirkeeper.models.entry import ActionKind, DirectoryEntry, RunConfig
from dirkeeper.models.outcome import OperationOutcome
from dirkeeper.models.report import RunReport

logger = logging.getLogger(__name__)

# Dispatch priority for entries sharing a path (lower runs first).
ACTION_PRIORITY: dict[ActionKind, int] = {
    ActionKind.ARCHIVE: 0,
    ActionKind.PURGE: 1,
    ActionKind.MEASURE: 2,
    ActionKind.ENUMERATE: 3,
}

EntryCallback = Callable[[DirectoryEntry], None]
OutcomeCallback = Callable[[OperationOutcome], None]


def _path_parts(entry: DirectoryEntry) -> tuple[str, ...]:
    """Normalized path components used for ordering and overlap checks."""
    return PurePath(os.path.abspath(os.path.expanduser(entry.path))).parts


def _sort_key(entry: DirectoryEntry) -> tuple[tuple[str, ...], int, bool, str]:
    return (
        _path_parts(entry),
        ACTION_PRIORITY[entry.action],
        entry.include_subdirectories,
        entry.path,
    )


def _purge_reaches(purge: DirectoryEntry, archive: DirectoryEntry) -> bool:
    """Check if a purge deletes anything inside an archive's tree."""
    purge_parts = _path_parts(purge)
    archive_parts = _path_parts(archive)
    if archive_parts == purge_parts:
        return True
    if not purge.include_subdirectories:
        return False
    return archive_parts[: len(purge_parts)] == purge_parts


def order_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Order entries for dispatch.

    Entries are sorted by path, then by action priority (archive, clean,
    analyze, list). A recursive purge of a directory is additionally
    preceded by every archive of a directory inside it. The result only
    depends on the set of entries, not on their configured order.

    Args:
        entries: Entries in configuration order.

    Returns:
        New list with the dispatch order.
    """
    pending = sorted(entries, key=_sort_key)
    ordered: list[DirectoryEntry] = []

    while pending:
        entry = pending.pop(0)
        if entry.action is ActionKind.PURGE:
            blockers = [
                e for e in pending if e.action is ActionKind.ARCHIVE and _purge_reaches(entry, e)
            ]
            for blocker in blockers:
                pending.remove(blocker)
                logger.debug("Moving %s before %s", blocker.describe(), entry.describe())
            ordered.extend(blockers)
        ordered.append(entry)

    return ordered


def validate_run_config(config: RunConfig, timestamp_tag: str = "0" * 14) -> None:
    """Check a configuration for problems that must stop a run before it starts.

    Args:
        config: Configuration to check.
        timestamp_tag: Run identity used to compute archive destinations.

    Raises:
        ConfigValidationError: If archive entries lack a destination or two
            archive entries would write the same file.
    """
    archive_root = config.archive_root_path
    archive_entries = [e for e in config.entries if e.action is ActionKind.ARCHIVE]
    if not archive_entries:
        return

    if archive_root is None:
        msg = "'backup_root_path' is required when any directory uses the backup action"
        raise ConfigValidationError(msg)

    seen: dict[Path, DirectoryEntry] = {}
    for entry in archive_entries:
        destination = ArchiveJob.for_entry(entry, archive_root, timestamp_tag).destination_file
        if destination in seen:
            msg = (
                f"Backups of '{seen[destination].path}' and '{entry.path}' "
                f"would both be written to {destination}"
            )
            raise ConfigValidationError(msg)
        seen[destination] = entry


class ActionScheduler:
    """Dispatches the entries of a run in a safe, deterministic order.

    Entries run strictly one after another. By default the first failed
    entry stops the run; ``continue_on_error`` instead records the
    failure and carries on with the remaining entries.

    Args:
        config: Validated run configuration.
        timestamp_tag: Run identity shared by every archive of the run.
        dry_run: If True, purge and archive only report what they would do.
        continue_on_error: If True, keep dispatching after a failure.
        on_start: Optional callback receiving each entry before it runs.
        on_event: Optional callback receiving per-path events.
        on_outcome: Optional callback receiving each finalized outcome.
    """

    def __init__(
        self,
        config: RunConfig,
        *,
        timestamp_tag: str,
        dry_run: bool = False,
        continue_on_error: bool = False,
        on_start: EntryCallback | None = None,
        on_event: EventCallback | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        self._config = config
        self._timestamp_tag = timestamp_tag
        self._dry_run = dry_run
        self._continue_on_error = continue_on_error
        self._on_start = on_start
        self._on_event = on_event
        self._on_outcome = on_outcome

    def plan(self) -> list[DirectoryEntry]:
        """Return the entries in the order they will be dispatched."""
        return order_entries(self._config.entries)

    def archive_job(self, entry: DirectoryEntry) -> ArchiveJob | None:
        """Return the archive job an entry would run, None for other actions."""
        archive_root = self._config.archive_root_path
        if entry.action is not ActionKind.ARCHIVE or archive_root is None:
            return None
        return ArchiveJob.for_entry(entry, archive_root, self._timestamp_tag)

    def run(self) -> RunReport:
        """Validate the configuration and dispatch every entry.

        Returns:
            RunReport with one outcome per dispatched entry.

        Raises:
            ConfigValidationError: If the configuration cannot be run. Nothing
                is dispatched in that case.
        """
        validate_run_config(self._config, self._timestamp_tag)

        report = RunReport(timestamp_tag=self._timestamp_tag)
        plan = self.plan()

        for index, entry in enumerate(plan):
            logger.info("Dispatching %s", entry.describe())
            if self._on_start is not None:
                self._on_start(entry)
            outcome = self._dispatch(entry)
            report.record(outcome)
            if self._on_outcome is not None:
                self._on_outcome(outcome)

            if outcome.failed and not self._continue_on_error:
                report.aborted = True
                report.pending = plan[index + 1 :]
                logger.error("Run aborted after failure: %s", outcome.error)
                break

        return report

    def _dispatch(self, entry: DirectoryEntry) -> OperationOutcome:
        """Run one entry, converting operation errors into a failed outcome."""
        operation = self._get_operation(entry.action)
        try:
            return operation.run(entry)
        except OperationError as e:
            logger.debug("Operation failed for %s", entry.describe(), exc_info=True)
            return OperationOutcome(entry=entry, error=str(e), dry_run=self._dry_run)

    def _get_operation(self, action: ActionKind) -> DirectoryOperation:
        """Get the operation instance handling an action."""
        if action is ActionKind.ENUMERATE:
            return EnumerateOperation(on_event=self._on_event)
        if action is ActionKind.MEASURE:
            return MeasureOperation(on_event=self._on_event)
        if action is ActionKind.PURGE:
            return PurgeOperation(dry_run=self._dry_run, on_event=self._on_event)

        archive_root = self._config.archive_root_path
        if archive_root is None:
            msg = "'backup_root_path' is required when any directory uses the backup action"
            raise ConfigValidationError(msg)
        return ArchiveOperation(
            archive_root,
            self._timestamp_tag,
            dry_run=self._dry_run,
            on_event=self._on_event,
        )
