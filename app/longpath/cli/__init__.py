"""CLI package for longpath.

This package contains the Typer application and all subcommands.
"""

from longpath.cli.main import app

__all__ = ["app"]
