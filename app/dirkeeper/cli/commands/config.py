"""Configuration management commands.

Provides commands to create a configuration file and to add directory
entries to it.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirkeeper.core.config import (
    ConfigError,
    config_exists,
    require_config,
    save_config,
)
from dirkeeper.core.paths import get_config_path
from dirkeeper.models.entry import ActionKind, DirectoryEntry, RunConfig
from dirkeeper.utils.formatting import print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create and edit the configuration file.",
    no_args_is_help=True,
)


@app.command()
def init(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Where to write the config. Defaults to ~/.config/dirkeeper/config.toml.",
        ),
    ] = None,
    backup_root: Annotated[
        str | None,
        typer.Option("--backup-root", "-b", help="Directory receiving backup archives."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config."),
    ] = False,
) -> None:
    """Create an empty configuration file."""
    path = output or get_config_path()

    if config_exists(path) and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    config = RunConfig(entries=[], archive_root=backup_root)
    try:
        saved = save_config(config, path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def add(
    path: Annotated[str, typer.Argument(help="Directory to operate on.")],
    action: Annotated[
        ActionKind,
        typer.Option("--action", "-a", help="Action to apply.", case_sensitive=False),
    ],
    subdirs: Annotated[
        bool,
        typer.Option("--subdirs", "-s", help="Include subdirectories."),
    ] = False,
    backup_root: Annotated[
        str | None,
        typer.Option("--backup-root", "-b", help="Set the directory receiving backup archives."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to edit."),
    ] = None,
) -> None:
    """Add a directory entry to the configuration."""
    target = config_path or get_config_path()
    config = require_config(target)

    entry = DirectoryEntry(path=path, include_subdirectories=subdirs, action=action)
    if entry in config.entries:
        print_info(f"Entry already configured: {entry.describe()}")
        return

    try:
        updated = RunConfig.model_validate(
            {
                "entries": [*config.entries, entry],
                "archive_root": backup_root or config.archive_root,
            }
        )
        save_config(updated, target)
    except ValueError as e:
        print_error(f"Invalid entry: {e}")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Added {entry.describe()} to {target}")
    if entry.action.is_destructive and entry.include_subdirectories:
        print_warning(f"Running this entry deletes every subdirectory of '{entry.path}'.")
