"""Data models for longpath.

This module exports the record and session data structures.
"""

from longpath.models.record import LengthUnit, PathRecord, measure_length
from longpath.models.session import ScanProgress, ScanState, ScanSummary, SubtreeError

__all__ = [
    "LengthUnit",
    "PathRecord",
    "ScanProgress",
    "ScanState",
    "ScanSummary",
    "SubtreeError",
    "measure_length",
]
