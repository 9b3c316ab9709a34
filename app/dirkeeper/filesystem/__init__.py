"""Directory traversal, operations, and archiving.

This module provides the tree walker and the four directory
operations (list, clean, analyze, backup) dispatched by a run.
"""

from dirkeeper.filesystem.archiver import ArchiveJob, ArchiveOperation, make_timestamp_tag
from dirkeeper.filesystem.base import DirectoryOperation
from dirkeeper.filesystem.errors import ArchiveError, DeleteError, OperationError, ReadError
from dirkeeper.filesystem.listing import EnumerateOperation
from dirkeeper.filesystem.measure import MeasureOperation, measure_tree
from dirkeeper.filesystem.purge import PurgeOperation
from dirkeeper.filesystem.walker import TraversalEntry, walk

__all__ = [
    "ArchiveError",
    "ArchiveJob",
    "ArchiveOperation",
    "DeleteError",
    "DirectoryOperation",
    "EnumerateOperation",
    "MeasureOperation",
    "OperationError",
    "PurgeOperation",
    "ReadError",
    "TraversalEntry",
    "make_timestamp_tag",
    "measure_tree",
    "walk",
]
