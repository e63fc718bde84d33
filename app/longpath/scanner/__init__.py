"""Directory traversal and scan lifecycle.

This module provides the traversal engine that measures path lengths
and the controller that runs it in the background with live progress
and cancellation.
"""

from longpath.scanner.controller import ScanController
from longpath.scanner.errors import (
    InvalidRootError,
    InvalidThresholdError,
    LengthComputationError,
    RootUnreadableError,
    ScanError,
    ScanInProgressError,
)
from longpath.scanner.traversal import (
    CancelToken,
    DirectoryEntered,
    EntryFound,
    SubtreeSkipped,
    TraversalCancelled,
    TraversalEngine,
    TraversalEvent,
)

__all__ = [
    "CancelToken",
    "DirectoryEntered",
    "EntryFound",
    "InvalidRootError",
    "InvalidThresholdError",
    "LengthComputationError",
    "RootUnreadableError",
    "ScanController",
    "ScanError",
    "ScanInProgressError",
    "SubtreeSkipped",
    "TraversalCancelled",
    "TraversalEngine",
    "TraversalEvent",
]
