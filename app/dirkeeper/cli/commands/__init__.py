"""CLI commands for dirkeeper.

This package contains all subcommand implementations.
"""

from dirkeeper.cli.commands import config, plan, run

__all__ = ["config", "plan", "run"]
