"""CLI package for dirkeeper.

This package contains the Typer application and all subcommands.
"""

from dirkeeper.cli.main import app

__all__ = ["app"]
