"""Configuration models for directory maintenance runs.

This module defines the Pydantic models describing which directories
a run operates on and which action applies to each of them. Field
aliases keep the on-disk key names (``directories``,
``include_directories``, ``backup_root_path``) stable.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Alternate spellings accepted for each action in config files.
_ACTION_ALIASES: dict[str, str] = {
    "enumerate": "list",
    "purge": "clean",
    "measure": "analyze",
    "archive": "backup",
}


class ActionKind(str, Enum):
    """Action applied to a configured directory.

    Attributes:
        ENUMERATE: Print the files (and optionally subdirectories) of the root.
        PURGE: Delete the files (and optionally subdirectories) of the root.
        MEASURE: Count files and bytes under the root.
        ARCHIVE: Write the whole tree to a timestamped ZIP archive.
    """

    ENUMERATE = "list"
    PURGE = "clean"
    MEASURE = "analyze"
    ARCHIVE = "backup"

    @classmethod
    def _missing_(cls, value: object) -> "ActionKind | None":
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        name = _ACTION_ALIASES.get(name, name)
        for member in cls:
            if member.value == name:
                return member
        return None

    @property
    def is_destructive(self) -> bool:
        """Check if this action removes anything from the filesystem."""
        return self is ActionKind.PURGE


class DirectoryEntry(BaseModel):
    """A single configured directory and the action to apply to it.

    Attributes:
        path: Root directory to operate on.
        include_subdirectories: Whether the action reaches into nested
            directories (read from ``include_directories``).
        action: Action applied to the root.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    path: Annotated[str, Field(min_length=1, description="Root directory to operate on")]
    include_subdirectories: Annotated[
        bool,
        Field(alias="include_directories", description="Recurse into nested directories"),
    ] = False
    action: Annotated[ActionKind, Field(description="Action applied to the directory")]

    @property
    def root(self) -> Path:
        """Filesystem root of this entry with ``~`` expanded."""
        return Path(self.path).expanduser()

    def describe(self) -> str:
        """Return a short human-readable label for messages."""
        return f"{self.action.value} '{self.path}'"


class RunConfig(BaseModel):
    """Complete description of one maintenance run.

    Attributes:
        entries: Configured directories in file order.
        archive_root: Directory receiving archives (read from
            ``backup_root_path``). Required when any entry archives.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    entries: Annotated[
        list[DirectoryEntry],
        Field(alias="directories", default_factory=list, description="Configured directories"),
    ]
    archive_root: Annotated[
        str | None,
        Field(alias="backup_root_path", description="Destination directory for archives"),
    ] = None

    @model_validator(mode="after")
    def validate_archive_root(self) -> "RunConfig":
        """Validate that archive entries have somewhere to write to."""
        if self.archive_root is None and self.has_archive_entries:
            paths = [e.path for e in self.entries if e.action is ActionKind.ARCHIVE]
            msg = f"'backup_root_path' is required for backup entries: {paths}"
            raise ValueError(msg)
        return self

    @property
    def has_archive_entries(self) -> bool:
        """Check if any entry archives its directory."""
        return any(e.action is ActionKind.ARCHIVE for e in self.entries)

    @property
    def archive_root_path(self) -> Path | None:
        """Archive destination with ``~`` expanded, or None if unset."""
        if self.archive_root is None:
            return None
        return Path(self.archive_root).expanduser()
