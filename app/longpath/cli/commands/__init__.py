"""CLI commands for longpath.

This package contains all subcommand implementations.
"""

from longpath.cli.commands import config, scan

__all__ = ["config", "scan"]
