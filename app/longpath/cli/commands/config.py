"""Config command implementation.

Shows and edits the scan defaults stored in ~/.config/longpath/config.toml.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from longpath.core.config import (
    ConfigError,
    ScanSettings,
    load_settings,
    save_settings,
    settings_to_dict,
    update_setting,
)
from longpath.core.paths import ensure_config_dir, get_settings_path
from longpath.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and edit scan defaults.",
    no_args_is_help=True,
)


def _load_or_exit() -> ScanSettings:
    try:
        return load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def show(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the effective scan settings."""
    settings = _load_or_exit()
    data = settings_to_dict(settings)

    if json_output:
        console.print_json(json.dumps(data))
        return

    path = get_settings_path()
    source = str(path) if path.exists() else f"{path} (not created, using defaults)"

    table = Table(title="Scan Settings", show_header=True, header_style="bold_header")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for name, field in ScanSettings.model_fields.items():
        table.add_row(name, str(data[name]), field.description or "")

    console.print(table)
    console.print(f"\n[dim]Source: {source}[/dim]")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_settings_path()))


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = get_settings_path()
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        ensure_config_dir()
        saved = save_settings(ScanSettings())
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Default config written to {saved}")


@app.command(name="set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. threshold.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Change one setting and save it.

    Examples:
        longpath config set threshold 200
        longpath config set unit bytes
        longpath config set over_only false
    """
    settings = _load_or_exit()
    try:
        updated = update_setting(settings, key, value)
        save_settings(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Set {key} = {settings_to_dict(updated)[key]}")
