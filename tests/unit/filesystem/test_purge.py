"""Unit tests for PurgeOperation.

Tests file removal, recursive and skipped subdirectories, link
handling, dry-run mode, and removal errors.
"""

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from dirkeeper.filesystem.errors import DeleteError
from dirkeeper.filesystem.purge import PurgeOperation
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationEvent


def _entry(path: Path, subdirs: bool = False) -> DirectoryEntry:
    return DirectoryEntry(path=str(path), action=ActionKind.PURGE, include_subdirectories=subdirs)


class TestPurgeOperation:
    """Tests for PurgeOperation."""

    def test_without_subdirs_keeps_subdirectory(self, sample_tree: Path) -> None:
        """Files go, subdirectories and their contents stay, root stays."""
        events: list[OperationEvent] = []
        outcome = PurgeOperation(on_event=events.append).run(_entry(sample_tree))

        assert not (sample_tree / "file1.txt").exists()
        assert (sample_tree / "subdir" / "file2.txt").read_text() == "Hello, subdir!"
        assert sample_tree.is_dir()

        assert outcome.files_touched == 1
        assert outcome.bytes_touched == len("Hello, world!")
        assert outcome.skipped == 1
        assert outcome.directories_touched == 0
        assert [e.kind for e in events] == [
            EventKind.REMOVED_FILE,
            EventKind.SKIPPED_DIRECTORY,
        ]

    def test_with_subdirs_removes_everything_but_root(self, sample_tree: Path) -> None:
        """Subdirectories are removed recursively; the root remains."""
        outcome = PurgeOperation().run(_entry(sample_tree, subdirs=True))

        assert sample_tree.is_dir()
        assert list(sample_tree.iterdir()) == []
        assert outcome.files_touched == 1
        assert outcome.directories_touched == 1
        assert outcome.skipped == 0

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Purging an empty directory succeeds and removes nothing."""
        outcome = PurgeOperation().run(_entry(tmp_path, subdirs=True))

        assert tmp_path.is_dir()
        assert outcome.files_touched == 0

    def test_symlink_unlinked_not_followed(self, tmp_path: Path, sample_tree: Path) -> None:
        """A link to an outside directory is removed without touching its target."""
        root = tmp_path / "purge_me"
        root.mkdir()
        (root / "outside").symlink_to(sample_tree, target_is_directory=True)

        PurgeOperation().run(_entry(root, subdirs=True))

        assert not (root / "outside").is_symlink()
        assert (sample_tree / "file1.txt").exists()
        assert (sample_tree / "subdir" / "file2.txt").exists()

    def test_link_to_directory_unlinked_without_subdirs(
        self, tmp_path: Path, sample_tree: Path
    ) -> None:
        """Without subdirs a link to a directory is removed as a file, not skipped."""
        root = tmp_path / "purge_me"
        root.mkdir()
        (root / "linked").symlink_to(sample_tree, target_is_directory=True)
        events: list[OperationEvent] = []

        outcome = PurgeOperation(on_event=events.append).run(_entry(root))

        assert [e.kind for e in events] == [EventKind.REMOVED_FILE]
        assert outcome.skipped == 0
        assert outcome.files_touched == 1
        assert not (root / "linked").is_symlink()
        assert (sample_tree / "subdir" / "file2.txt").exists()

    def test_dry_run_changes_nothing(self, sample_tree: Path) -> None:
        """Dry-run reports removals without removing anything."""
        events: list[OperationEvent] = []
        outcome = PurgeOperation(dry_run=True, on_event=events.append).run(
            _entry(sample_tree, subdirs=True)
        )

        assert (sample_tree / "file1.txt").exists()
        assert (sample_tree / "subdir" / "file2.txt").exists()
        assert outcome.dry_run is True
        assert outcome.files_touched == 1
        assert all(e.dry_run for e in events)
        assert {e.kind for e in events} == {EventKind.REMOVED_FILE, EventKind.REMOVED_DIRECTORY}

    def test_file_removal_error(self, sample_tree: Path) -> None:
        """A failed file removal raises DeleteError naming the file."""
        with (
            patch.object(Path, "unlink", side_effect=PermissionError(13, "Permission denied")),
            pytest.raises(DeleteError, match="file1.txt"),
        ):
            PurgeOperation().run(_entry(sample_tree))

    def test_directory_removal_error(self, sample_tree: Path) -> None:
        """A failed directory removal raises DeleteError naming the directory."""
        with (
            patch(
                "dirkeeper.filesystem.purge.shutil.rmtree",
                side_effect=PermissionError(13, "Permission denied"),
            ),
            pytest.raises(DeleteError, match="subdir"),
        ):
            PurgeOperation().run(_entry(sample_tree, subdirs=True))

    def test_first_failure_stops_purge(self, sample_tree: Path) -> None:
        """Entries after the failing one are left alone."""
        (sample_tree / "zzz.txt").write_text("later")

        with (
            patch.object(shutil, "rmtree", side_effect=OSError(16, "Device or resource busy")),
            pytest.raises(DeleteError),
        ):
            PurgeOperation().run(_entry(sample_tree, subdirs=True))

        assert (sample_tree / "zzz.txt").exists()

    def test_action(self) -> None:
        """The operation handles the clean action."""
        assert PurgeOperation().action is ActionKind.PURGE
