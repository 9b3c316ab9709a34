"""Plan command implementation.

Shows the order in which a configuration would be dispatched without
touching any directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirkeeper.cli.display import create_plan_table
from dirkeeper.core.config import ConfigError, require_config
from dirkeeper.core.scheduler import ActionScheduler, validate_run_config
from dirkeeper.filesystem.archiver import make_timestamp_tag
from dirkeeper.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Show the dispatch order of a configuration.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_plan(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (TOML or JSON). Defaults to ~/.config/dirkeeper/config.toml.",
        ),
    ] = None,
) -> None:
    """Show which action runs on which directory, in order."""
    config = require_config(config_path)

    if not config.entries:
        print_info("No directories configured.")
        return

    timestamp_tag = make_timestamp_tag()
    try:
        validate_run_config(config, timestamp_tag)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scheduler = ActionScheduler(config, timestamp_tag=timestamp_tag)
    entries = scheduler.plan()
    archive_jobs = {}
    for entry in entries:
        job = scheduler.archive_job(entry)
        if job is not None:
            archive_jobs[entry] = job

    console.print(create_plan_table(entries, archive_jobs))
