"""Scan report model for JSON export.

This module defines the data structure for exporting scan results
to JSON with proper metadata.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from longpath.core.filters import count_exceeding
from longpath.models.record import PathRecord
from longpath.models.session import ScanSummary, SubtreeError


@dataclass(frozen=True, slots=True)
class ReportMetadata:
    """Metadata for a scan report.

    Attributes:
        timestamp: ISO format timestamp when the report was created.
        hostname: Name of the machine that was scanned.
        longpath_version: Version of longpath that performed the scan.
        root: Scan root directory.
        threshold: Length threshold used for classification.
        unit: Unit in which lengths were counted.
        state: Final session state.
        was_cancelled: Whether the scan was stopped early.
    """

    timestamp: str
    hostname: str
    longpath_version: str
    root: str
    threshold: int
    unit: str
    state: str
    was_cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "longpath_version": self.longpath_version,
            "root": self.root,
            "threshold": self.threshold,
            "unit": self.unit,
            "state": self.state,
            "was_cancelled": self.was_cancelled,
        }


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Complete scan report for export.

    Attributes:
        metadata: Report metadata including timestamp and scan settings.
        records: Exported records, in output order.
        errors: Subtrees that could not be read.
        summary: Record count summary.
    """

    metadata: ReportMetadata
    records: list[PathRecord]
    errors: list[SubtreeError] = field(default_factory=lambda: [])
    summary: dict[str, int] = field(default_factory=lambda: {})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "records": [record_to_dict(r) for r in self.records],
            "errors": [_error_to_dict(e) for e in self.errors],
            "summary": self.summary,
        }

    @classmethod
    def create(cls, summary: ScanSummary, records: list[PathRecord]) -> "ScanReport":
        """Create a ScanReport with auto-generated metadata.

        The summary block counts the exported records, which may be a
        filtered subset of what the scan visited.

        Args:
            summary: Outcome of the scan session.
            records: Records to include.

        Returns:
            ScanReport with populated metadata and summary.
        """
        import socket

        from longpath import __version__

        directories = sum(1 for r in records if r.is_directory)
        counts = {
            "total": len(records),
            "exceeding": count_exceeding(records),
            "directories": directories,
            "files": len(records) - directories,
            "entries_visited": summary.entries_visited,
            "unreadable": len(summary.errors),
        }

        metadata = ReportMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            longpath_version=__version__,
            root=summary.root,
            threshold=summary.threshold,
            unit=summary.unit.value,
            state=summary.state.value,
            was_cancelled=summary.was_cancelled,
        )

        return cls(
            metadata=metadata,
            records=records,
            errors=list(summary.errors),
            summary=counts,
        )


def build_report(summary: ScanSummary, records: list[PathRecord]) -> dict[str, Any]:
    """Build the JSON-serializable report for a scan.

    Args:
        summary: Outcome of the scan session.
        records: Records to include, in output order.

    Returns:
        Report dictionary ready for json.dump.
    """
    return ScanReport.create(summary, records).to_dict()


def record_to_dict(record: PathRecord) -> dict[str, Any]:
    """Convert a PathRecord to a dictionary.

    Args:
        record: The record to convert.

    Returns:
        Dictionary representation of the record.
    """
    return {
        "path": record.path,
        "length": record.length,
        "is_directory": record.is_directory,
        "exceeds_threshold": record.exceeds_threshold,
        "is_link": record.is_link,
        "depth": record.depth,
    }


def _error_to_dict(error: SubtreeError) -> dict[str, Any]:
    return {"path": error.path, "reason": error.reason, "errno": error.errno}
