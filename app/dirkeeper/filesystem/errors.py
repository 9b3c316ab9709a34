"""Exceptions raised by directory operations."""


class OperationError(Exception):
    """Base exception for a failed directory operation.

    Attributes:
        path: Filesystem path that caused the failure.
        reason: Short description of what went wrong.
    """

    operation = "operate on"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to {self.operation} '{path}': {reason}")


class ReadError(OperationError):
    """Raised when a directory listing or file metadata cannot be read."""

    operation = "read"


class DeleteError(OperationError):
    """Raised when a file or directory cannot be removed."""

    operation = "remove"


class ArchiveError(OperationError):
    """Raised when an archive cannot be created, written, or finalized."""

    operation = "archive"
