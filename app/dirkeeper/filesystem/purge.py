"""Directory purge operation.

Deletes the direct children of a root. Files are always removed;
subdirectories are removed recursively only when subdirectories are
included, and are otherwise left untouched. The root itself is never
removed.
"""

import logging
import shutil

from dirkeeper.filesystem.base import DirectoryOperation
from dirkeeper.filesystem.errors import DeleteError, ReadError
from dirkeeper.filesystem.walker import TraversalEntry, walk
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationOutcome

logger = logging.getLogger(__name__)


class PurgeOperation(DirectoryOperation):
    """Removes the contents of a directory.

    Symbolic links are unlinked, never followed, so a purge cannot
    reach outside its root. The first failed removal aborts the purge.
    """

    @property
    def action(self) -> ActionKind:
        return ActionKind.PURGE

    def run(self, entry: DirectoryEntry) -> OperationOutcome:
        files = 0
        removed_bytes = 0
        directories = 0
        skipped = 0

        for item in walk(entry.root, recursive=False):
            if item.is_directory:
                if not entry.include_subdirectories:
                    skipped += 1
                    self._emit(EventKind.SKIPPED_DIRECTORY, str(item.absolute_path))
                    continue
                self._emit(EventKind.REMOVED_DIRECTORY, str(item.absolute_path))
                self._remove_directory(item)
                directories += 1
            else:
                self._emit(EventKind.REMOVED_FILE, str(item.absolute_path))
                removed_bytes += self._remove_file(item)
                files += 1

        return OperationOutcome(
            entry=entry,
            files_touched=files,
            bytes_touched=removed_bytes,
            directories_touched=directories,
            skipped=skipped,
            dry_run=self._dry_run,
        )

    def _remove_file(self, item: TraversalEntry) -> int:
        """Delete a file or link and return the bytes it occupied."""
        path = item.absolute_path
        try:
            size = path.lstat().st_size
        except OSError as e:
            raise ReadError(str(path), e.strerror or str(e)) from e

        if self._dry_run:
            logger.info("Dry-run: would remove file %s", path)
            return size

        try:
            path.unlink()
        except OSError as e:
            raise DeleteError(str(path), e.strerror or str(e)) from e
        return size

    def _remove_directory(self, item: TraversalEntry) -> None:
        """Delete a directory and everything beneath it."""
        path = item.absolute_path
        if self._dry_run:
            logger.info("Dry-run: would remove directory %s", path)
            return

        try:
            shutil.rmtree(path)
        except OSError as e:
            raise DeleteError(str(path), e.strerror or str(e)) from e
