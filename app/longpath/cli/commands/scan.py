"""Scan command implementation.

Scans a directory tree for paths at or over a length threshold, showing
live progress while the scan runs in the background.
"""

import io
import json
import os
import time
from pathlib import Path
from typing import Annotated

import typer

from longpath.cli.types import OutputFormat
from longpath.core.config import ConfigError, ScanSettings, load_settings
from longpath.core.filters import EntryKind, SortOrder, filter_records, sort_records
from longpath.export import ExportError, build_report, export_records, write_csv
from longpath.models.record import LengthUnit, PathRecord
from longpath.models.session import ScanState, ScanSummary
from longpath.scanner import ScanController, ScanError
from longpath.utils.formatting import (
    console,
    create_records_table,
    format_duration,
    format_progress,
    format_record_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

# Seconds between progress refreshes while waiting for the scan
POLL_INTERVAL = 0.1

# Unreadable directories listed individually before summarizing the rest
MAX_ERRORS_SHOWN = 10


def scan(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Argument(help="Directory to scan.", show_default=False),
    ],
    threshold: Annotated[
        int | None,
        typer.Option(
            "--threshold",
            "-t",
            min=0,
            help="Flag paths at least this long (default from config, 240).",
        ),
    ] = None,
    unit: Annotated[
        LengthUnit | None,
        typer.Option(
            "--unit",
            "-u",
            help="Length unit: utf16, chars or bytes.",
            case_sensitive=False,
        ),
    ] = None,
    over_only: Annotated[
        bool | None,
        typer.Option(
            "--over-only/--all",
            help="Show only paths over the threshold, or every entry.",
        ),
    ] = None,
    kind: Annotated[
        EntryKind,
        typer.Option(
            "--kind",
            "-k",
            help="Entries to show: all, files or dirs.",
            case_sensitive=False,
        ),
    ] = EntryKind.ALL,
    sort: Annotated[
        SortOrder,
        typer.Option(
            "--sort",
            "-s",
            help="Order: discovery or length (longest first).",
            case_sensitive=False,
        ),
    ] = SortOrder.DISCOVERY,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Limit number of paths to display.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table, json or csv.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to a CSV file (JSON if the name ends in .json).",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            min=0.0,
            help="Stop the scan after this many seconds and keep partial results.",
        ),
    ] = None,
) -> None:
    """Scan a directory for paths that are too long.

    Every entry below ROOT is measured. Press Ctrl-C to stop early and
    keep the results found so far.

    Examples:
        longpath scan .                         # Paths of 240+ UTF-16 units
        longpath scan /data -t 200              # Custom threshold
        longpath scan /data --all --sort length # Every entry, longest first
        longpath scan /data --unit bytes        # Count encoded bytes
        longpath scan /data -e report.csv       # Export to CSV
        longpath scan /data --format json       # Output as JSON
    """
    settings = _load_settings_or_exit()
    threshold = settings.threshold if threshold is None else threshold
    unit = settings.unit if unit is None else unit
    over_only = settings.over_only if over_only is None else over_only
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    controller = ScanController(unit=unit, sort_entries=settings.sort_entries)
    try:
        # Lengths are measured on absolute paths
        controller.start(os.path.abspath(root), threshold)
    except ScanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    show_status = output_format == OutputFormat.TABLE and not quiet and console.is_terminal
    _wait_for_scan(controller, timeout=timeout, show_status=show_status)

    summary = controller.summary()
    if summary.failed:
        print_error(f"Scan failed: {summary.failure}")
        raise typer.Exit(code=1)

    records = sort_records(
        filter_records(controller.results(), over_only=over_only, kind=kind),
        sort,
    )

    # Export ALL matching records, not limited
    if export_path is not None:
        try:
            written = export_records(records, export_path.resolve(), summary)
        except ExportError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        if not quiet and output_format == OutputFormat.TABLE:
            print_info(f"Exported {len(records)} paths ({written.value}) to {export_path}")

    display = records[:limit] if limit else records

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(build_report(summary, display)))
        return

    if output_format == OutputFormat.CSV:
        buffer = io.StringIO()
        write_csv(display, buffer)
        typer.echo(buffer.getvalue(), nl=False)
        return

    _print_table(display, summary, over_only=over_only)
    if not quiet:
        _print_summary(summary, shown=len(display), matched=len(records), limit=limit)
    _print_errors(summary)


def _load_settings_or_exit() -> ScanSettings:
    """Load settings, turning config errors into a CLI error."""
    try:
        return load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _wait_for_scan(
    controller: ScanController,
    *,
    timeout: float | None,
    show_status: bool,
) -> None:
    """Wait for the scan to finish, cancelling on Ctrl-C or timeout.

    Args:
        controller: Controller running the scan.
        timeout: Seconds after which the scan is cancelled, or None.
        show_status: Render a live status line from progress snapshots.
    """
    deadline = None if timeout is None else time.monotonic() + timeout

    try:
        if show_status:
            with console.status(format_progress(controller.progress())) as status:
                while not controller.wait(POLL_INTERVAL):
                    status.update(format_progress(controller.progress()))
                    _cancel_after_deadline(controller, deadline, timeout)
        else:
            while not controller.wait(POLL_INTERVAL):
                _cancel_after_deadline(controller, deadline, timeout)
    except KeyboardInterrupt:
        print_warning("Interrupted, stopping scan...")
        controller.cancel()
        controller.wait()


def _cancel_after_deadline(
    controller: ScanController,
    deadline: float | None,
    timeout: float | None,
) -> None:
    if deadline is None or controller.state != ScanState.RUNNING:
        return
    if time.monotonic() >= deadline:
        print_warning(f"Timeout of {timeout:g}s reached, stopping scan.")
        controller.cancel()


def _print_table(records: list[PathRecord], summary: ScanSummary, *, over_only: bool) -> None:
    """Display records as a Rich table."""
    if not records:
        if over_only:
            print_success(
                f"No paths of {summary.threshold} {summary.unit.label} or more found."
            )
        else:
            print_info("No entries found.")
        return

    title = "Long Paths" if over_only else "Scanned Paths"
    table = create_records_table(f"{title} (threshold {summary.threshold})")
    for record in records:
        table.add_row(*format_record_row(record, summary.threshold))
    console.print(table)


def _print_summary(summary: ScanSummary, *, shown: int, matched: int, limit: int | None) -> None:
    """Print the scan totals below the table."""
    console.print(
        f"\n[dim]Scanned {summary.entries_visited} entries in "
        f"{format_duration(summary.elapsed_seconds)}: "
        f"{summary.exceeded_count} at or over {summary.threshold} {summary.unit.label}[/dim]"
    )
    if limit and shown < matched:
        console.print(f"[dim](showing {shown} of {matched}, limited to {limit})[/dim]")
    if summary.was_cancelled:
        print_warning("Scan was stopped early; results are partial.")


def _print_errors(summary: ScanSummary) -> None:
    """Warn about directories that could not be read."""
    if not summary.errors:
        return

    print_warning(f"{len(summary.errors)} directories could not be read:")
    for error in summary.errors[:MAX_ERRORS_SHOWN]:
        print_warning(f"  {error.path}: {error.reason}")
    remaining = len(summary.errors) - MAX_ERRORS_SHOWN
    if remaining > 0:
        print_warning(f"  ... and {remaining} more")
