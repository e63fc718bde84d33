"""Export of scan results to CSV and JSON files.

The format is chosen from the destination's suffix: ``.json`` writes a
JSON report with metadata, anything else writes CSV.
"""

import json
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from longpath.export.csv_export import CSV_HEADER, record_to_row, write_csv
from longpath.export.report import ReportMetadata, ScanReport, build_report, record_to_dict
from longpath.models.record import PathRecord
from longpath.models.session import ScanSummary


class ExportFormat(str, Enum):
    """Supported export file formats."""

    CSV = "csv"
    JSON = "json"


class ExportError(Exception):
    """Raised when results cannot be written."""


def format_for_path(path: Path) -> ExportFormat:
    """Pick the export format from a file suffix."""
    if path.suffix.lower() == ".json":
        return ExportFormat.JSON
    return ExportFormat.CSV


def export_records(
    records: Sequence[PathRecord],
    path: Path,
    summary: ScanSummary,
) -> ExportFormat:
    """Write records to ``path`` as CSV or JSON.

    Undecodable filename bytes are written back as the original bytes.

    Args:
        records: Records to export, in output order.
        path: Destination file.
        summary: Outcome of the scan, used for JSON metadata.

    Returns:
        The format that was written.

    Raises:
        ExportError: If path is a directory or cannot be written.
    """
    if path.is_dir():
        msg = f"Export path is a directory: {path}"
        raise ExportError(msg)

    export_format = format_for_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            if export_format == ExportFormat.JSON:
                json.dump(build_report(summary, list(records)), f, indent=2)
            else:
                write_csv(records, f)
    except OSError as e:
        msg = f"Failed to export to {path}: {e}"
        raise ExportError(msg) from e

    return export_format


__all__ = [
    "CSV_HEADER",
    "ExportError",
    "ExportFormat",
    "ReportMetadata",
    "ScanReport",
    "build_report",
    "export_records",
    "format_for_path",
    "record_to_dict",
    "record_to_row",
    "write_csv",
]
