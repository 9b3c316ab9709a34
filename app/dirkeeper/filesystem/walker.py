"""Depth-first directory tree walker.

Produces a lazy, pre-order sequence of entries under a root directory.
Children are visited in sorted name order. Symbolic links are reported
but never descended into.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from dirkeeper.filesystem.errors import ReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TraversalEntry:
    """A filesystem entry discovered under a walk root.

    Attributes:
        absolute_path: Full path of the entry.
        relative_path: Path relative to the walk root, always using ``/``.
        is_directory: True for real directories (not links to them).
        is_symlink: True if the entry is a symbolic link.
    """

    absolute_path: Path
    relative_path: str
    is_directory: bool
    is_symlink: bool = False

    @property
    def depth(self) -> int:
        """Nesting level below the root (direct children are 1)."""
        return self.relative_path.count("/") + 1


def walk(root: Path, *, recursive: bool = False) -> Iterator[TraversalEntry]:
    """Walk a directory tree in pre-order.

    Each directory is yielded before its contents. Without ``recursive``
    only the direct children of the root are yielded. The root itself is
    never yielded. Every call re-reads the filesystem.

    Args:
        root: Directory to walk.
        recursive: If True, descend into every nested directory.

    Yields:
        TraversalEntry for each child (and descendant, if recursive).

    Raises:
        ReadError: If the root is not a directory, or a listing or an
            entry's metadata cannot be read.
    """
    try:
        root_stat = root.stat()
    except OSError as e:
        raise ReadError(str(root), e.strerror or str(e)) from e
    if not root.is_dir():
        raise ReadError(str(root), "Not a directory")

    visited: set[tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}
    yield from _walk_directory(root, root, recursive, visited)


def _walk_directory(
    directory: Path,
    root: Path,
    recursive: bool,
    visited: set[tuple[int, int]],
) -> Iterator[TraversalEntry]:
    """Yield the children of one directory, descending if requested."""
    try:
        children = sorted(directory.iterdir())
    except OSError as e:
        raise ReadError(str(directory), e.strerror or str(e)) from e

    for child in children:
        try:
            is_symlink = child.is_symlink()
            info = child.lstat()
        except OSError as e:
            raise ReadError(str(child), e.strerror or str(e)) from e

        is_directory = not is_symlink and child.is_dir()
        entry = TraversalEntry(
            absolute_path=child,
            relative_path=child.relative_to(root).as_posix(),
            is_directory=is_directory,
            is_symlink=is_symlink,
        )
        yield entry

        if not (recursive and is_directory):
            continue

        key = (info.st_dev, info.st_ino)
        if key in visited:
            logger.warning("Skipping already visited directory: %s", child)
            continue
        visited.add(key)
        yield from _walk_directory(child, root, recursive, visited)
