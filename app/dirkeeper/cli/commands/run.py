"""Run command implementation.

Loads a configuration and dispatches every configured directory to its
action in dispatch order.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirkeeper.cli.display import (
    create_results_table,
    print_entry_start,
    print_event,
    print_outcome,
    print_run_summary,
)
from dirkeeper.core.config import ConfigError, require_config
from dirkeeper.core.scheduler import ActionScheduler
from dirkeeper.filesystem.archiver import make_timestamp_tag
from dirkeeper.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Run every configured directory action.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_entries(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (TOML or JSON). Defaults to ~/.config/dirkeeper/config.toml.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed or archived."),
    ] = False,
    keep_going: Annotated[
        bool,
        typer.Option(
            "--keep-going",
            "-k",
            help="Continue with the remaining directories after a failure.",
        ),
    ] = False,
) -> None:
    """Run the configured actions.

    Directories run one at a time, ordered by path; for the same path a
    backup always runs before a clean. By default the first failure stops
    the run.

    Examples:
        dirkeeper run                          # Use the default config
        dirkeeper run -c maintenance.json      # Use a specific config
        dirkeeper run --dry-run                # Remove and archive nothing
        dirkeeper run --keep-going             # Report every failure
    """
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    config = require_config(config_path)

    if not config.entries:
        print_info("No directories configured.")
        return

    scheduler = ActionScheduler(
        config,
        timestamp_tag=make_timestamp_tag(),
        dry_run=dry_run,
        continue_on_error=keep_going,
        on_start=print_entry_start,
        on_event=None if quiet else print_event,
        on_outcome=print_outcome,
    )

    try:
        report = scheduler.run()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print()
    console.print(create_results_table(report))
    print_run_summary(report)

    if not report.success:
        raise typer.Exit(code=1)
