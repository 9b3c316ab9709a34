"""Abstract base class for directory operations.

This module defines the DirectoryOperation interface that every
action handler (list, clean, analyze, backup) implements.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationEvent, OperationOutcome

EventCallback = Callable[[OperationEvent], None]


class DirectoryOperation(ABC):
    """Abstract base class for all directory operations.

    Operations are stateless apart from their options: each call to
    :meth:`run` re-reads the filesystem for a single entry.

    Attributes:
        dry_run: If True, only simulate filesystem changes.

    Example:
        >>> operation = MeasureOperation()
        >>> outcome = operation.run(entry)
        >>> print(outcome.files_touched, outcome.bytes_touched)
    """

    def __init__(self, *, dry_run: bool = False, on_event: EventCallback | None = None) -> None:
        """Initialize the operation.

        Args:
            dry_run: If True, report changes without making them.
            on_event: Optional callback receiving one event per path touched.
        """
        self._dry_run = dry_run
        self._on_event = on_event

    @property
    def dry_run(self) -> bool:
        """Check if operation is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def action(self) -> ActionKind:
        """Return the action this operation handles."""

    @abstractmethod
    def run(self, entry: DirectoryEntry) -> OperationOutcome:
        """Run the operation for one configured entry.

        Args:
            entry: The directory entry to operate on.

        Returns:
            OperationOutcome with the counts for this entry.

        Raises:
            OperationError: If the filesystem could not be read or changed.
        """

    def _emit(self, kind: EventKind, path: str) -> None:
        """Publish a progress event if a callback is registered."""
        if self._on_event is not None:
            self._on_event(OperationEvent(kind=kind, path=path, dry_run=self._dry_run))
