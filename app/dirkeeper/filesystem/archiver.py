"""Directory archiver.

Writes a complete directory tree into a single ZIP archive named
``{destination}/{basename}_{timestamp}.zip``. File contents are streamed
in chunks, entry names are relative to the source root and always use
``/``, and empty directories are kept as directory markers.
"""

import logging
import shutil
import stat
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from dirkeeper.core.paths import ensure_directory
from dirkeeper.filesystem.base import DirectoryOperation, EventCallback
from dirkeeper.filesystem.errors import ArchiveError, ReadError
from dirkeeper.filesystem.walker import TraversalEntry, walk
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationOutcome

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = "zip"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Permission bits stored in archive entries (no execute bit on files)
FILE_MODE = 0o644
DIRECTORY_MODE = 0o755

_CHUNK_SIZE = 1024 * 1024


def make_timestamp_tag(now: datetime | None = None) -> str:
    """Format the run identity shared by all archives of one run.

    Args:
        now: Moment to format. Defaults to the current UTC time.

    Returns:
        Fixed-width ``YYYYMMDDHHMMSS`` string.
    """
    moment = now or datetime.now(UTC)
    return moment.strftime(TIMESTAMP_FORMAT)


def archive_base_name(source_root: Path) -> str:
    """Return the name used for a source root in archive file names."""
    name = source_root.name
    if not name or name in (".", ".."):
        name = source_root.resolve().name
    return name or "root"


@dataclass(frozen=True, slots=True)
class ArchiveJob:
    """One archive to write within a run.

    Attributes:
        source_root: Directory tree to archive.
        destination_file: Archive file to create.
        timestamp_tag: Run identity embedded in the file name.
    """

    source_root: Path
    destination_file: Path
    timestamp_tag: str

    @classmethod
    def for_entry(
        cls,
        entry: DirectoryEntry,
        destination_root: Path,
        timestamp_tag: str,
    ) -> "ArchiveJob":
        """Derive the archive job for a configured entry.

        Args:
            entry: Entry whose root is archived.
            destination_root: Directory receiving the archive.
            timestamp_tag: Run identity shared by all jobs of the run.

        Returns:
            ArchiveJob with the destination file name computed.
        """
        source_root = entry.root
        file_name = f"{archive_base_name(source_root)}_{timestamp_tag}.{ARCHIVE_EXTENSION}"
        return cls(
            source_root=source_root,
            destination_file=destination_root / file_name,
            timestamp_tag=timestamp_tag,
        )


class ArchiveOperation(DirectoryOperation):
    """Archives a whole directory tree.

    The subdirectory flag of the entry is ignored: archives always
    capture the entire tree.

    Attributes:
        _destination_root: Directory receiving archives.
        _timestamp_tag: Run identity embedded in archive names.
    """

    def __init__(
        self,
        destination_root: Path,
        timestamp_tag: str,
        *,
        dry_run: bool = False,
        on_event: EventCallback | None = None,
    ) -> None:
        super().__init__(dry_run=dry_run, on_event=on_event)
        self._destination_root = destination_root
        self._timestamp_tag = timestamp_tag

    @property
    def action(self) -> ActionKind:
        return ActionKind.ARCHIVE

    def run(self, entry: DirectoryEntry) -> OperationOutcome:
        job = ArchiveJob.for_entry(entry, self._destination_root, self._timestamp_tag)
        files, total_bytes, directories = self.write(job)
        return OperationOutcome(
            entry=entry,
            files_touched=files,
            bytes_touched=total_bytes,
            directories_touched=directories,
            archive_path=str(job.destination_file),
            dry_run=self._dry_run,
        )

    def write(self, job: ArchiveJob) -> tuple[int, int, int]:
        """Write the archive for a job.

        The archive is finalized before this method returns. On failure a
        partially written archive is left in place.

        Args:
            job: Archive job to execute.

        Returns:
            Tuple of (files, bytes, directories) written.

        Raises:
            ArchiveError: If the destination cannot be created, a source
                entry cannot be read, or the archive cannot be finalized.
        """
        if self._dry_run:
            logger.info("Dry-run: would archive %s to %s", job.source_root, job.destination_file)
            return self._simulate(job)

        try:
            ensure_directory(job.destination_file.parent, "archive destination")
        except RuntimeError as e:
            raise ArchiveError(str(job.destination_file.parent), str(e)) from e

        logger.info("Archiving %s to %s", job.source_root, job.destination_file)
        try:
            with zipfile.ZipFile(job.destination_file, "x", compression=zipfile.ZIP_STORED) as zf:
                return self._write_entries(job, zf)
        except ReadError as e:
            raise ArchiveError(e.path, e.reason) from e
        except OSError as e:
            raise ArchiveError(str(job.destination_file), e.strerror or str(e)) from e

    def _write_entries(self, job: ArchiveJob, zf: zipfile.ZipFile) -> tuple[int, int, int]:
        """Stream every entry of the source tree into an open archive."""
        files = 0
        total_bytes = 0
        directories = 0

        for item in self._entries(job):
            try:
                if item.is_directory:
                    info = zipfile.ZipInfo.from_file(
                        item.absolute_path, item.relative_path, strict_timestamps=False
                    )
                    info.external_attr = ((stat.S_IFDIR | DIRECTORY_MODE) << 16) | 0x10
                    info.CRC = info.file_size = info.compress_size = 0
                    zf.mkdir(info)
                    directories += 1
                    self._emit(EventKind.ARCHIVED_DIRECTORY, info.filename)
                    continue

                info = zipfile.ZipInfo.from_file(
                    item.absolute_path, item.relative_path, strict_timestamps=False
                )
                info.compress_type = zipfile.ZIP_STORED
                info.external_attr = (stat.S_IFREG | FILE_MODE) << 16
                with open(item.absolute_path, "rb") as src, zf.open(info, "w") as dst:
                    shutil.copyfileobj(src, dst, _CHUNK_SIZE)
            except OSError as e:
                raise ArchiveError(str(item.absolute_path), e.strerror or str(e)) from e

            files += 1
            total_bytes += info.file_size
            self._emit(EventKind.ARCHIVED_FILE, info.filename)

        return files, total_bytes, directories

    def _simulate(self, job: ArchiveJob) -> tuple[int, int, int]:
        """Count what an archive would contain without writing it."""
        files = 0
        total_bytes = 0
        directories = 0

        try:
            for item in self._entries(job):
                if item.is_directory:
                    directories += 1
                    self._emit(EventKind.ARCHIVED_DIRECTORY, f"{item.relative_path}/")
                    continue
                try:
                    total_bytes += item.absolute_path.stat().st_size
                except OSError as e:
                    raise ArchiveError(str(item.absolute_path), e.strerror or str(e)) from e
                files += 1
                self._emit(EventKind.ARCHIVED_FILE, item.relative_path)
        except ReadError as e:
            raise ArchiveError(e.path, e.reason) from e

        return files, total_bytes, directories

    def _entries(self, job: ArchiveJob) -> Iterator[TraversalEntry]:
        """Yield the source entries that belong in the archive."""
        destination = job.destination_file.absolute()
        for item in walk(job.source_root, recursive=True):
            if item.absolute_path.absolute() == destination:
                continue
            if item.is_symlink and item.absolute_path.is_dir():
                logger.warning("Skipping symbolic link to directory: %s", item.absolute_path)
                continue
            try:
                item.relative_path.encode("utf-8")
            except UnicodeEncodeError as e:
                path = str(item.absolute_path).encode("utf-8", "backslashreplace").decode("utf-8")
                raise ArchiveError(path, "File name is not valid UTF-8") from e
            yield item
