"""Outcome and event models for directory operations.

Operations publish an OperationEvent for every file or directory they
touch and return one OperationOutcome per configured entry.
"""

from dataclasses import dataclass
from enum import Enum

from dirkeeper.models.entry import DirectoryEntry


class EventKind(str, Enum):
    """Kind of per-path progress event.

    Attributes:
        FILE: A file was listed.
        DIRECTORY: A directory was listed.
        REMOVED_FILE: A file was deleted.
        REMOVED_DIRECTORY: A directory tree was deleted.
        SKIPPED_DIRECTORY: A directory was left in place by a purge.
        ARCHIVED_FILE: A file was written to an archive.
        ARCHIVED_DIRECTORY: A directory marker was written to an archive.
    """

    FILE = "file"
    DIRECTORY = "directory"
    REMOVED_FILE = "removed_file"
    REMOVED_DIRECTORY = "removed_directory"
    SKIPPED_DIRECTORY = "skipped_directory"
    ARCHIVED_FILE = "archived_file"
    ARCHIVED_DIRECTORY = "archived_directory"


@dataclass(frozen=True, slots=True)
class OperationEvent:
    """A single file or directory touched by an operation.

    Attributes:
        kind: What happened to the path.
        path: Absolute path for listing/purge events, archive entry name
            for archive events.
        dry_run: Whether the event was only simulated.
    """

    kind: EventKind
    path: str
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """Result of running one configured entry.

    Attributes:
        entry: The entry that was dispatched.
        files_touched: Files listed, measured, removed, or archived.
        bytes_touched: Bytes measured, removed, or archived.
        directories_touched: Directories listed, removed, or archived.
        skipped: Directories a purge left in place.
        archive_path: Archive written for archive entries, None otherwise.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether the operation was simulated.
    """

    entry: DirectoryEntry
    files_touched: int = 0
    bytes_touched: int = 0
    directories_touched: int = 0
    skipped: int = 0
    archive_path: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """Check if the operation completed without error."""
        return self.error is None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return self.error is not None
