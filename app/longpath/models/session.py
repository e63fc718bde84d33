"""Scan session models.

This module defines the lifecycle states of a scan, the immutable
progress snapshot published while a scan runs, and the summary of a
finished scan.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from longpath.models.record import LengthUnit


class ScanState(str, Enum):
    """Lifecycle state of a scan session.

    Attributes:
        IDLE: Created, not started.
        RUNNING: Traversal in progress.
        CANCELLING: Cancellation requested, traversal winding down.
        COMPLETED: Finished, fully or partially if cancelled.
        FAILED: Root unreadable or internal failure.
    """

    IDLE = "idle"
    RUNNING = "running"
    CANCELLING = "cancelling"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_active(self) -> bool:
        """Whether a traversal is still running in this state."""
        return self in (ScanState.RUNNING, ScanState.CANCELLING)

    @property
    def is_terminal(self) -> bool:
        """Whether the session has finished."""
        return self in (ScanState.COMPLETED, ScanState.FAILED)


@dataclass(frozen=True, slots=True)
class SubtreeError:
    """A subdirectory that could not be listed.

    Attributes:
        path: Directory that could not be read.
        reason: Human-readable error message.
        errno: OS error number, if known.
    """

    path: str
    reason: str
    errno: int | None = None

    @classmethod
    def from_os_error(cls, path: str, exc: OSError) -> "SubtreeError":
        """Build from an OSError raised while listing ``path``."""
        return cls(path=path, reason=exc.strerror or str(exc), errno=exc.errno)


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Immutable snapshot of a scan's progress.

    A new snapshot replaces the previous one on every update, so readers
    never see a half-updated instance.

    Attributes:
        state: Lifecycle state.
        entries_visited: Records emitted so far.
        exceeded_count: Records at or over the threshold so far.
        directories_visited: Directories listed so far.
        current_path: Directory being listed, empty before the first one.
        current_depth: Depth of ``current_path`` below the root.
        error_count: Subtrees skipped because they could not be read.
        elapsed_seconds: Time since the scan started.
        was_cancelled: True once a cancellation request was observed.
    """

    state: ScanState = ScanState.IDLE
    entries_visited: int = 0
    exceeded_count: int = 0
    directories_visited: int = 0
    current_path: str = ""
    current_depth: int = 0
    error_count: int = 0
    elapsed_seconds: float = 0.0
    was_cancelled: bool = False

    def evolve(self, **changes: object) -> "ScanProgress":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class ScanSummary:
    """Outcome of a scan session.

    Attributes:
        root: Scan root as given to the controller.
        threshold: Length threshold used for classification.
        unit: Unit in which lengths were counted.
        state: Final (or current) lifecycle state.
        was_cancelled: True if the scan was stopped by request.
        entries_visited: Number of records produced.
        exceeded_count: Number of records at or over the threshold.
        errors: Subtrees that could not be read.
        failure: Reason for a failed session, None otherwise.
        elapsed_seconds: Wall-clock duration of the scan.
    """

    root: str
    threshold: int
    unit: LengthUnit
    state: ScanState
    was_cancelled: bool = False
    entries_visited: int = 0
    exceeded_count: int = 0
    errors: tuple[SubtreeError, ...] = field(default_factory=tuple)
    failure: str | None = None
    elapsed_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        """Check if the session ended in the failed state."""
        return self.state == ScanState.FAILED
