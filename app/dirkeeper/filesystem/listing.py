"""Directory listing operation.

Lists the direct children of a root. The subdirectory flag only
controls whether directory names are reported; listing never descends
into nested directories.
"""

from dirkeeper.filesystem.base import DirectoryOperation
from dirkeeper.filesystem.walker import walk
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationOutcome


class EnumerateOperation(DirectoryOperation):
    """Reports one event per file, and per directory when requested."""

    @property
    def action(self) -> ActionKind:
        return ActionKind.ENUMERATE

    def run(self, entry: DirectoryEntry) -> OperationOutcome:
        files = 0
        directories = 0

        for item in walk(entry.root, recursive=False):
            if item.is_directory:
                if entry.include_subdirectories:
                    directories += 1
                    self._emit(EventKind.DIRECTORY, str(item.absolute_path))
            else:
                files += 1
                self._emit(EventKind.FILE, str(item.absolute_path))

        return OperationOutcome(
            entry=entry,
            files_touched=files,
            directories_touched=directories,
        )
