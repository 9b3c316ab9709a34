"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from dirkeeper import __version__
from dirkeeper.cli.commands import config, plan, run
from dirkeeper.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="dirkeeper",
    help="Configuration-driven directory maintenance.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dirkeeper version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress per-file output.",
        ),
    ] = False,
) -> None:
    """dirkeeper - list, clean, analyze, and back up directories.

    Describe the directories and the action for each of them in a
    configuration file, then run them all in one go.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(plan.app, name="plan")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
