"""Filtering and ordering of scan results.

Scans always record every entry; these helpers narrow and reorder the
result set for display and export without touching the records.
"""

from collections.abc import Iterable
from enum import Enum

from longpath.models.record import PathRecord


class EntryKind(str, Enum):
    """Which kinds of entries to keep."""

    ALL = "all"
    FILES = "files"
    DIRS = "dirs"


class SortOrder(str, Enum):
    """Ordering of records for display and export.

    Attributes:
        DISCOVERY: Traversal order.
        LENGTH: Longest paths first; ties keep traversal order.
    """

    DISCOVERY = "discovery"
    LENGTH = "length"


def filter_records(
    records: Iterable[PathRecord],
    *,
    over_only: bool = False,
    kind: EntryKind = EntryKind.ALL,
    min_length: int | None = None,
) -> list[PathRecord]:
    """Select records matching all given criteria, keeping their order.

    Args:
        records: Records to filter.
        over_only: Keep only records at or over the scan threshold.
        kind: Keep files, directories, or both.
        min_length: Keep only records at least this long.

    Returns:
        List of matching records.
    """
    selected: list[PathRecord] = []
    for record in records:
        if over_only and not record.exceeds_threshold:
            continue
        if kind == EntryKind.FILES and record.is_directory:
            continue
        if kind == EntryKind.DIRS and not record.is_directory:
            continue
        if min_length is not None and record.length < min_length:
            continue
        selected.append(record)
    return selected


def sort_records(records: Iterable[PathRecord], order: SortOrder) -> list[PathRecord]:
    """Return records in the requested order."""
    if order == SortOrder.LENGTH:
        return sorted(records, key=lambda r: r.length, reverse=True)
    return list(records)


def count_exceeding(records: Iterable[PathRecord]) -> int:
    """Count records at or over the scan threshold."""
    return sum(1 for r in records if r.exceeds_threshold)
