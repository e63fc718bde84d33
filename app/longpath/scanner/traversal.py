"""Directory traversal engine.

Walks a directory tree depth-first with an explicit stack, measuring the
length of every entry's path and emitting an ordered stream of events.
Links to directories are recorded but never followed, so symlink cycles
cannot make the walk loop.

Order: the entries of a directory are emitted (sorted by name unless
sorting is disabled) before any of its subdirectories are entered, and
subdirectories are entered in the same order. With sorting disabled the
order follows ``os.scandir`` and may differ between runs on some
filesystems.
"""

import logging
import os
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from longpath.models.record import LengthUnit, PathRecord
from longpath.models.session import SubtreeError
from longpath.scanner.errors import (
    InvalidThresholdError,
    LengthComputationError,
    RootUnreadableError,
)

logger = logging.getLogger(__name__)


class CancelToken:
    """Cooperative cancellation flag shared between threads."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call repeatedly."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._event.is_set()


@dataclass(frozen=True, slots=True)
class DirectoryEntered:
    """A directory is about to be listed."""

    path: str
    depth: int


@dataclass(frozen=True, slots=True)
class EntryFound:
    """An entry was measured and classified."""

    record: PathRecord


@dataclass(frozen=True, slots=True)
class SubtreeSkipped:
    """A subdirectory could not be listed; nothing below it is reported."""

    error: SubtreeError


@dataclass(frozen=True, slots=True)
class TraversalCancelled:
    """The walk stopped on a cancellation request before finishing."""

    pending: int


TraversalEvent = DirectoryEntered | EntryFound | SubtreeSkipped | TraversalCancelled


class TraversalEngine:
    """Walks a directory tree and classifies entries by path length.

    Args:
        threshold: Length at or above which an entry is flagged.
        unit: Unit in which path lengths are counted.
        sort_entries: If True, list each directory's entries by name so
            the output order is stable across runs.

    Raises:
        InvalidThresholdError: If threshold is negative.
    """

    def __init__(
        self,
        threshold: int,
        *,
        unit: LengthUnit = LengthUnit.UTF16,
        sort_entries: bool = True,
    ) -> None:
        if threshold < 0:
            msg = f"Threshold must be non-negative, got {threshold}"
            raise InvalidThresholdError(msg)
        self._threshold = threshold
        self._unit = unit
        self._sort_entries = sort_entries

    @property
    def threshold(self) -> int:
        """Length threshold used for classification."""
        return self._threshold

    @property
    def unit(self) -> LengthUnit:
        """Unit in which path lengths are counted."""
        return self._unit

    def walk(self, root: str, cancel: CancelToken | None = None) -> Iterator[TraversalEvent]:
        """Walk ``root`` and yield traversal events in discovery order.

        The root itself is only reported if its own path meets the
        threshold. Every descendant is reported, tagged with whether it
        exceeds the threshold. The cancellation token is checked before
        each directory is listed.

        Args:
            root: Directory to start from.
            cancel: Optional cancellation token.

        Yields:
            DirectoryEntered, EntryFound and SubtreeSkipped events, and a
            final TraversalCancelled if the walk was cut short.

        Raises:
            RootUnreadableError: If the root directory cannot be listed.
            LengthComputationError: If a listed path cannot be measured.
        """
        root = os.fspath(root)
        root_record = self._make_record(root, is_directory=True, is_link=False, depth=0)
        if root_record.exceeds_threshold:
            yield EntryFound(root_record)

        # (directory, depth) pairs still to be listed
        stack: list[tuple[str, int]] = [(root, 0)]

        while stack:
            if cancel is not None and cancel.cancelled:
                logger.debug("Traversal cancelled with %d directories pending", len(stack))
                yield TraversalCancelled(len(stack))
                return

            directory, depth = stack.pop()
            yield DirectoryEntered(path=directory, depth=depth)

            try:
                entries = self._list_directory(directory)
            except OSError as exc:
                if depth == 0:
                    msg = f"Cannot read root directory {directory}: {exc}"
                    raise RootUnreadableError(msg) from exc
                logger.warning("Cannot read directory %s: %s", directory, exc)
                yield SubtreeSkipped(SubtreeError.from_os_error(directory, exc))
                continue

            subdirectories: list[str] = []
            for entry in entries:
                is_link = self._is_link(entry)
                is_directory = self._is_directory(entry)

                yield EntryFound(
                    self._make_record(
                        entry.path,
                        is_directory=is_directory,
                        is_link=is_link,
                        depth=depth + 1,
                    )
                )

                if not is_directory:
                    continue
                if is_link:
                    logger.debug("Not following link: %s", entry.path)
                    continue
                subdirectories.append(entry.path)

            # Reversed so the first subdirectory is popped first
            stack.extend((path, depth + 1) for path in reversed(subdirectories))

    def iter_records(self, root: str, cancel: CancelToken | None = None) -> Iterator[PathRecord]:
        """Walk ``root`` and yield only the records.

        Unreadable subtrees are skipped silently (they are still logged).

        Args:
            root: Directory to start from.
            cancel: Optional cancellation token.

        Yields:
            PathRecord for each reported entry.
        """
        for event in self.walk(root, cancel):
            if isinstance(event, EntryFound):
                yield event.record

    def _list_directory(self, directory: str) -> list[os.DirEntry[str]]:
        """Read a directory listing completely.

        The listing is materialized before any entry is reported so a
        failure halfway through never produces a partial directory.
        """
        with os.scandir(directory) as it:
            entries = list(it)
        if self._sort_entries:
            entries.sort(key=lambda e: e.name)
        return entries

    def _make_record(
        self,
        path: str,
        *,
        is_directory: bool,
        is_link: bool,
        depth: int,
    ) -> PathRecord:
        try:
            return PathRecord.create(
                path,
                threshold=self._threshold,
                is_directory=is_directory,
                unit=self._unit,
                is_link=is_link,
                depth=depth,
            )
        except (UnicodeError, ValueError) as exc:
            msg = f"Cannot compute length of {path!r}: {exc}"
            raise LengthComputationError(msg) from exc

    @staticmethod
    def _is_link(entry: os.DirEntry[str]) -> bool:
        """Check for symlinks and directory junctions without following them."""
        try:
            return entry.is_symlink() or entry.is_junction()
        except OSError:
            logger.debug("Cannot determine link status of: %s", entry.path)
            return False

    @staticmethod
    def _is_directory(entry: os.DirEntry[str]) -> bool:
        """Check if an entry is, or links to, a directory.

        Dead links and entries whose type cannot be read count as files.
        """
        try:
            return entry.is_dir()
        except OSError:
            logger.debug("Cannot determine type of: %s", entry.path)
            return False
