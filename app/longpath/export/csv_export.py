"""CSV serialization of scan records."""

import csv
import os
from collections.abc import Iterable
from typing import TextIO

from longpath.models.record import PathRecord

CSV_HEADER: tuple[str, ...] = ("path", "length", "is_directory", "exceeds_threshold")


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def record_to_row(record: PathRecord) -> tuple[str, str, str, str]:
    """Convert a record to a CSV row in header order."""
    return (
        record.path,
        str(record.length),
        _format_bool(record.is_directory),
        _format_bool(record.exceeds_threshold),
    )


def write_csv(records: Iterable[PathRecord], destination: TextIO | str | os.PathLike[str]) -> int:
    """Write records as CSV with a header row.

    Paths containing the delimiter, a quote character or a line break
    are quoted, with embedded quotes doubled.

    Args:
        records: Records to write, in output order.
        destination: Text stream opened with ``newline=""``, or a file
            path. Files are written as UTF-8 with undecodable filename
            bytes restored.

    Returns:
        Number of records written (header excluded).
    """
    if isinstance(destination, (str, os.PathLike)):
        with open(destination, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            return write_csv(records, f)

    writer = csv.writer(destination, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for record in records:
        writer.writerow(record_to_row(record))
        count += 1
    return count
