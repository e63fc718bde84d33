"""Path record model and path length measurement.

This module defines the immutable unit of scan output and the rules for
counting the length of a path in a given unit.
"""

import os
from dataclasses import dataclass
from enum import Enum


class LengthUnit(str, Enum):
    """Unit in which path lengths are counted.

    Attributes:
        UTF16: UTF-16 code units, as counted by the Windows MAX_PATH limit.
        CHARS: Unicode code points.
        BYTES: Bytes of the OS-encoded path, as counted by POSIX PATH_MAX.
    """

    UTF16 = "utf16"
    CHARS = "chars"
    BYTES = "bytes"

    @property
    def label(self) -> str:
        """Human-readable name of the unit, in plural."""
        return _UNIT_LABELS[self]


_UNIT_LABELS: dict[LengthUnit, str] = {
    LengthUnit.UTF16: "UTF-16 units",
    LengthUnit.CHARS: "characters",
    LengthUnit.BYTES: "bytes",
}


def measure_length(path: str, unit: LengthUnit = LengthUnit.UTF16) -> int:
    """Count the length of a path in the given unit.

    Lone surrogates produced by undecodable filename bytes are counted
    instead of rejected: one UTF-16 unit each, or the original byte
    when counting bytes.

    Args:
        path: Path string as returned by the OS.
        unit: Unit to count in.

    Returns:
        Length of the path.

    Raises:
        UnicodeError: If the path cannot be encoded in the requested unit.
    """
    if unit == LengthUnit.UTF16:
        return len(path.encode("utf-16-le", "surrogatepass")) // 2
    if unit == LengthUnit.BYTES:
        return len(os.fsencode(path))
    return len(path)


@dataclass(frozen=True, slots=True)
class PathRecord:
    """A filesystem entry discovered during traversal.

    Attributes:
        path: Full path as produced by the traversal (not normalized).
        length: Length of ``path`` in the scan's length unit.
        is_directory: True for directories, including links to directories.
        exceeds_threshold: True if ``length`` met or exceeded the threshold.
        is_link: True for symbolic links and junctions (never descended).
        depth: Distance from the scan root (0 for the root itself).
    """

    path: str
    length: int
    is_directory: bool
    exceeds_threshold: bool
    is_link: bool = False
    depth: int = 0

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.length < 0:
            msg = f"Length cannot be negative, got {self.length}"
            raise ValueError(msg)
        if self.depth < 0:
            msg = f"Depth cannot be negative, got {self.depth}"
            raise ValueError(msg)

    @property
    def kind(self) -> str:
        """Short label for the entry type."""
        if self.is_link:
            return "link"
        return "dir" if self.is_directory else "file"

    @classmethod
    def create(
        cls,
        path: str,
        *,
        threshold: int,
        is_directory: bool,
        unit: LengthUnit = LengthUnit.UTF16,
        is_link: bool = False,
        depth: int = 0,
    ) -> "PathRecord":
        """Measure a path and classify it against a threshold.

        Args:
            path: Full path of the entry.
            threshold: Length at or above which the entry is flagged.
            is_directory: Whether the entry is a directory.
            unit: Unit to count the length in.
            is_link: Whether the entry is a link.
            depth: Distance from the scan root.

        Returns:
            PathRecord with length and classification filled in.
        """
        length = measure_length(path, unit)
        return cls(
            path=path,
            length=length,
            is_directory=is_directory,
            exceeds_threshold=length >= threshold,
            is_link=is_link,
            depth=depth,
        )
