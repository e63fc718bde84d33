"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from longpath import __version__
from longpath.cli.commands import config, scan
from longpath.utils.log import configure_logging

# Create main Typer app
app = typer.Typer(
    name="longpath",
    help="Find filesystem paths that are too long.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"longpath version {__version__}")
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
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """longpath - Find filesystem paths that are too long.

    Scans a directory tree and reports every path whose length meets
    or exceeds a threshold (240 UTF-16 units by default).
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="scan")(scan.scan)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
