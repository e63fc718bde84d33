"""Scan controller.

Runs one traversal at a time on a background thread and exposes its
progress, results and outcome to the caller without ever blocking on
filesystem I/O.

Shared state between the worker thread and callers is limited to the
record list, the subtree error list and the progress snapshot. The
snapshot is an immutable object replaced wholesale, so ``progress()``
reads it without locking. The lists are appended and copied under a
lock that is never held across I/O.
"""

import logging
import os
import threading
import time
from collections.abc import Callable
from contextlib import closing

from longpath.models.record import LengthUnit, PathRecord
from longpath.models.session import ScanProgress, ScanState, ScanSummary, SubtreeError
from longpath.scanner.errors import InvalidRootError, ScanError, ScanInProgressError
from longpath.scanner.traversal import (
    CancelToken,
    DirectoryEntered,
    EntryFound,
    SubtreeSkipped,
    TraversalCancelled,
    TraversalEngine,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]


class ScanController:
    """Owns the lifecycle of a scan session.

    Args:
        unit: Unit in which path lengths are counted.
        sort_entries: Passed to the traversal engine; sorts each directory
            listing by name for a stable output order.
        on_update: Optional callback invoked from the worker thread with
            each new progress snapshot.
    """

    def __init__(
        self,
        *,
        unit: LengthUnit = LengthUnit.UTF16,
        sort_entries: bool = True,
        on_update: ProgressCallback | None = None,
    ) -> None:
        self._unit = unit
        self._sort_entries = sort_entries
        self._on_update = on_update

        self._lock = threading.Lock()
        self._records: list[PathRecord] = []
        self._errors: list[SubtreeError] = []
        self._progress = ScanProgress()
        self._failure: str | None = None

        self._root = ""
        self._threshold = 0
        self._started_at = 0.0
        self._cancel = CancelToken()
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> ScanState:
        """Current lifecycle state."""
        return self._progress.state

    @property
    def root(self) -> str:
        """Root of the current (or last) session."""
        return self._root

    @property
    def threshold(self) -> int:
        """Threshold of the current (or last) session."""
        return self._threshold

    @property
    def unit(self) -> LengthUnit:
        """Unit in which path lengths are counted."""
        return self._unit

    def start(self, root: str | os.PathLike[str], threshold: int) -> None:
        """Start scanning ``root`` in the background.

        Any previous finished session is discarded. Returns as soon as the
        worker thread has been launched.

        Args:
            root: Directory to scan.
            threshold: Length at or above which entries are flagged.

        Raises:
            InvalidRootError: If root does not exist or is not a directory.
            InvalidThresholdError: If threshold is negative.
            ScanInProgressError: If a scan is still running.
        """
        root_str = os.fspath(root)
        if not os.path.exists(root_str):
            msg = f"Scan root does not exist: {root_str}"
            raise InvalidRootError(msg)
        if not os.path.isdir(root_str):
            msg = f"Scan root is not a directory: {root_str}"
            raise InvalidRootError(msg)

        engine = TraversalEngine(threshold, unit=self._unit, sort_entries=self._sort_entries)

        cancel = CancelToken()
        done = threading.Event()
        with self._lock:
            # Checked under the lock so concurrent callers cannot both start
            if self._progress.state.is_active:
                msg = f"A scan of {self._root} is still running"
                raise ScanInProgressError(msg)
            self._records = []
            self._errors = []
            self._failure = None
            self._root = root_str
            self._threshold = threshold
            self._cancel = cancel
            self._done = done
            self._started_at = time.monotonic()
            self._progress = ScanProgress(state=ScanState.RUNNING)

        logger.info(
            "Starting scan of %s (threshold=%d, unit=%s)",
            root_str,
            threshold,
            self._unit.value,
        )
        self._thread = threading.Thread(
            target=self._run,
            args=(engine, root_str, cancel, done),
            name="longpath-scan",
            daemon=True,
        )
        self._thread.start()

    def progress(self) -> ScanProgress:
        """Return the latest progress snapshot.

        Never blocks. While a scan is active the elapsed time is brought
        up to date even if the worker is waiting on a slow directory.
        """
        snapshot = self._progress
        if snapshot.state.is_active:
            return snapshot.evolve(elapsed_seconds=self._elapsed())
        return snapshot

    def cancel(self) -> None:
        """Request cancellation of the running scan.

        Idempotent and asynchronous: returns once the request is recorded,
        not once the worker has stopped. Does nothing unless running.
        """
        with self._lock:
            if self._progress.state != ScanState.RUNNING:
                return
            self._cancel.cancel()
            self._progress = self._progress.evolve(
                state=ScanState.CANCELLING,
                was_cancelled=True,
                elapsed_seconds=self._elapsed(),
            )
        logger.info("Cancellation requested for scan of %s", self._root)

    def results(self) -> tuple[PathRecord, ...]:
        """Return the records accumulated so far, in discovery order."""
        with self._lock:
            return tuple(self._records)

    def errors(self) -> tuple[SubtreeError, ...]:
        """Return the subtrees that could not be read so far."""
        with self._lock:
            return tuple(self._errors)

    def is_done(self) -> bool:
        """Check if the session reached Completed or Failed."""
        return self.state.is_terminal

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the session finishes.

        Args:
            timeout: Maximum seconds to wait, or None to wait indefinitely.

        Returns:
            True if the session finished, False on timeout or if no scan
            was ever started.
        """
        if self.state == ScanState.IDLE:
            return False
        return self._done.wait(timeout)

    def summary(self) -> ScanSummary:
        """Summarize the current (or last) session."""
        with self._lock:
            errors = tuple(self._errors)
            failure = self._failure
        snapshot = self.progress()
        return ScanSummary(
            root=self._root,
            threshold=self._threshold,
            unit=self._unit,
            state=snapshot.state,
            was_cancelled=snapshot.was_cancelled,
            entries_visited=snapshot.entries_visited,
            exceeded_count=snapshot.exceeded_count,
            errors=errors,
            failure=failure,
            elapsed_seconds=snapshot.elapsed_seconds,
        )

    # === Worker thread ===

    def _run(
        self,
        engine: TraversalEngine,
        root: str,
        cancel: CancelToken,
        done: threading.Event,
    ) -> None:
        """Consume the traversal and publish records and progress."""
        failure: str | None = None
        interrupted = False
        try:
            with closing(engine.walk(root, cancel)) as events:
                for event in events:
                    if cancel.cancelled:
                        interrupted = True
                        break
                    if isinstance(event, EntryFound):
                        self._add_record(event.record)
                    elif isinstance(event, DirectoryEntered):
                        self._enter_directory(event)
                    elif isinstance(event, SubtreeSkipped):
                        self._add_error(event.error)
                    elif isinstance(event, TraversalCancelled):
                        interrupted = True
        except ScanError as e:
            logger.error("Scan of %s failed: %s", root, e)
            failure = str(e)
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected error during scan of %s", root)
            failure = f"Internal error: {e}"
        finally:
            self._finish(interrupted, failure)
            done.set()

    def _add_record(self, record: PathRecord) -> None:
        with self._lock:
            self._records.append(record)
            current = self._progress
            snapshot = current.evolve(
                state=self._active_state(),
                entries_visited=current.entries_visited + 1,
                exceeded_count=current.exceeded_count + int(record.exceeds_threshold),
                elapsed_seconds=self._elapsed(),
            )
            self._progress = snapshot
        self._notify(snapshot)

    def _enter_directory(self, event: DirectoryEntered) -> None:
        with self._lock:
            current = self._progress
            snapshot = current.evolve(
                state=self._active_state(),
                directories_visited=current.directories_visited + 1,
                current_path=event.path,
                current_depth=event.depth,
                elapsed_seconds=self._elapsed(),
            )
            self._progress = snapshot
        self._notify(snapshot)

    def _add_error(self, error: SubtreeError) -> None:
        with self._lock:
            self._errors.append(error)
            current = self._progress
            snapshot = current.evolve(
                state=self._active_state(),
                error_count=current.error_count + 1,
                elapsed_seconds=self._elapsed(),
            )
            self._progress = snapshot
        self._notify(snapshot)

    def _finish(self, was_cancelled: bool, failure: str | None) -> None:
        """Publish the terminal state.

        ``was_cancelled`` is True only if the traversal was actually cut
        short; a cancel request that arrives after the last event leaves a
        complete result set.
        """
        with self._lock:
            self._failure = failure
            snapshot = self._progress.evolve(
                state=ScanState.FAILED if failure else ScanState.COMPLETED,
                was_cancelled=was_cancelled,
                elapsed_seconds=self._elapsed(),
            )
            self._progress = snapshot

        if failure:
            logger.info("Scan of %s failed after %.2fs", self._root, snapshot.elapsed_seconds)
        else:
            logger.info(
                "Scan of %s %s: %d entries, %d over threshold, %d unreadable",
                self._root,
                "cancelled" if was_cancelled else "completed",
                snapshot.entries_visited,
                snapshot.exceeded_count,
                snapshot.error_count,
            )
        self._notify(snapshot)

    def _active_state(self) -> ScanState:
        """State to publish while the worker runs; caller holds the lock."""
        return ScanState.CANCELLING if self._cancel.cancelled else ScanState.RUNNING

    def _elapsed(self) -> float:
        return time.monotonic() - self._started_at

    def _notify(self, snapshot: ScanProgress) -> None:
        if self._on_update is None:
            return
        try:
            self._on_update(snapshot)
        except Exception:  # noqa: BLE001
            logger.exception("Progress callback failed")
