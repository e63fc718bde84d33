"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from longpath.core.theme import get_theme

if TYPE_CHECKING:
    from longpath.models.record import PathRecord
    from longpath.models.session import ScanProgress

# Paths within this fraction of the threshold are highlighted as near the limit
NEAR_LIMIT_RATIO = 0.9


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_records_table(title: str = "Long Paths") -> Table:
    """Create a pre-configured table for displaying path records.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for record display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Length", justify="right", width=7)
    table.add_column("Type", width=5)
    table.add_column("Path", overflow="fold")
    return table


def length_style(record: PathRecord, threshold: int) -> str:
    """Pick the style name for a record's length.

    Args:
        record: Record to style.
        threshold: Threshold the record was classified against.

    Returns:
        "over_limit", "near_limit" or "within_limit".
    """
    if record.exceeds_threshold:
        return "over_limit"
    if record.length >= threshold * NEAR_LIMIT_RATIO:
        return "near_limit"
    return "within_limit"


def format_record_row(record: PathRecord, threshold: int) -> tuple[str, str, str]:
    """Format a record as a table row with proper styling.

    Args:
        record: The record to format.
        threshold: Threshold the record was classified against.

    Returns:
        Tuple of (length, type, path) with Rich markup.
    """
    style = length_style(record, threshold)
    length = f"[{style}]{record.length}[/]"

    if record.is_link:
        kind = "[link]link[/]"
    elif record.is_directory:
        kind = "[directory]dir[/]"
    else:
        kind = "[muted]file[/]"

    return (length, kind, f"[record.path]{escape(record.path)}[/]")


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as a short human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"


def format_progress(progress: ScanProgress, max_path: int = 60) -> str:
    """Format a progress snapshot as a one-line status message.

    Args:
        progress: Snapshot to format.
        max_path: Maximum characters of the current path to show; longer
            paths keep their tail.

    Returns:
        Status line with Rich markup.
    """
    current = progress.current_path
    if len(current) > max_path:
        current = "…" + current[-(max_path - 1) :]

    return (
        f"[info]{progress.state.value.capitalize()}[/] "
        f"{progress.entries_visited} entries, "
        f"[over_limit]{progress.exceeded_count}[/] over limit "
        f"[muted]({format_duration(progress.elapsed_seconds)})[/] "
        f"[muted]{escape(current)}[/]"
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
