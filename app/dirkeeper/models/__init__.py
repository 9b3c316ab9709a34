"""Data models for dirkeeper.

This module exports the configuration, outcome, and report models.
"""

from dirkeeper.models.entry import ActionKind, DirectoryEntry, RunConfig
from dirkeeper.models.outcome import EventKind, OperationEvent, OperationOutcome
from dirkeeper.models.report import RunReport

__all__ = [
    "ActionKind",
    "DirectoryEntry",
    "EventKind",
    "OperationEvent",
    "OperationOutcome",
    "RunConfig",
    "RunReport",
]
