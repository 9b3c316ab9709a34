"""Directory measurement operation.

Counts files and sums their sizes under a root, descending through
every nesting level when subdirectories are included.
"""

import logging
from pathlib import Path

from dirkeeper.filesystem.base import DirectoryOperation
from dirkeeper.filesystem.errors import ReadError
from dirkeeper.filesystem.walker import walk
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import OperationOutcome

logger = logging.getLogger(__name__)


def measure_tree(root: Path, *, recursive: bool = False) -> tuple[int, int]:
    """Count files and total bytes under a directory.

    Without ``recursive`` the walk does not descend, so files inside
    subdirectories are never visited. Symbolic links count with the
    size of the link itself.

    Args:
        root: Directory to measure.
        recursive: If True, include files at every nesting level.

    Returns:
        Tuple of (file_count, total_bytes).

    Raises:
        ReadError: If any listing or file size cannot be read. A single
            unreadable file aborts the whole measurement.
    """
    file_count = 0
    total_bytes = 0

    for item in walk(root, recursive=recursive):
        if item.is_directory:
            continue
        try:
            size = item.absolute_path.lstat().st_size
        except OSError as e:
            raise ReadError(str(item.absolute_path), e.strerror or str(e)) from e
        file_count += 1
        total_bytes += size

    logger.debug("Measured %s: %d files, %d bytes", root, file_count, total_bytes)
    return file_count, total_bytes


class MeasureOperation(DirectoryOperation):
    """Reports the file count and total size of a directory."""

    @property
    def action(self) -> ActionKind:
        return ActionKind.MEASURE

    def run(self, entry: DirectoryEntry) -> OperationOutcome:
        file_count, total_bytes = measure_tree(
            entry.root, recursive=entry.include_subdirectories
        )
        return OperationOutcome(
            entry=entry,
            files_touched=file_count,
            bytes_touched=total_bytes,
        )
