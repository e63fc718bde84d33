"""Tests for the path record model and length measurement."""

import sys

import pytest
from longpath.models.record import LengthUnit, PathRecord, measure_length

utf8_fs = pytest.mark.skipif(
    sys.getfilesystemencoding().lower() not in ("utf-8", "utf8"),
    reason="byte counts assume a UTF-8 filesystem encoding",
)


class TestLengthUnit:
    """Tests for LengthUnit enum."""

    def test_length_unit_values(self) -> None:
        """Verify all LengthUnit values exist with correct string values."""
        assert LengthUnit.UTF16 == "utf16"
        assert LengthUnit.CHARS == "chars"
        assert LengthUnit.BYTES == "bytes"
        assert len(LengthUnit) == 3

    def test_labels(self) -> None:
        """Every unit has a readable label."""
        assert LengthUnit.UTF16.label == "UTF-16 units"
        assert LengthUnit.CHARS.label == "characters"
        assert LengthUnit.BYTES.label == "bytes"


class TestMeasureLength:
    """Tests for measure_length function."""

    def test_ascii_is_same_in_every_unit(self) -> None:
        """ASCII paths have the same length in all units."""
        path = "/r/aaa.txt"
        assert measure_length(path, LengthUnit.UTF16) == 10
        assert measure_length(path, LengthUnit.CHARS) == 10
        assert measure_length(path, LengthUnit.BYTES) == 10

    def test_default_unit_is_utf16(self) -> None:
        """Without a unit, UTF-16 code units are counted."""
        assert measure_length("/\U0001f600") == 3

    def test_astral_character_counts_two_utf16_units(self) -> None:
        """Characters outside the BMP take a surrogate pair in UTF-16."""
        path = "/\U0001f600"
        assert measure_length(path, LengthUnit.UTF16) == 3
        assert measure_length(path, LengthUnit.CHARS) == 2

    def test_bmp_character_counts_one_utf16_unit(self) -> None:
        """Accented letters are a single UTF-16 unit."""
        assert measure_length("/é", LengthUnit.UTF16) == 2

    @utf8_fs
    def test_bytes_counts_encoded_length(self) -> None:
        """Byte counts follow the UTF-8 encoding of the path."""
        assert measure_length("/é", LengthUnit.BYTES) == 3
        assert measure_length("/\U0001f600", LengthUnit.BYTES) == 5

    def test_lone_surrogate_does_not_raise(self) -> None:
        """Undecodable filename bytes are counted, not rejected."""
        path = "/bad\udcff"
        assert measure_length(path, LengthUnit.UTF16) == 5
        assert measure_length(path, LengthUnit.CHARS) == 5

    @utf8_fs
    def test_lone_surrogate_counts_original_byte(self) -> None:
        """A surrogate-escaped byte counts as one byte."""
        assert measure_length("/bad\udcff", LengthUnit.BYTES) == 5

    def test_empty_path(self) -> None:
        """An empty string has length zero."""
        assert measure_length("", LengthUnit.UTF16) == 0


class TestPathRecord:
    """Tests for PathRecord frozen dataclass."""

    def test_record_creation(self) -> None:
        """Create a valid PathRecord with all fields populated."""
        record = PathRecord(
            path="/r/bb",
            length=5,
            is_directory=True,
            exceeds_threshold=False,
            is_link=False,
            depth=1,
        )
        assert record.path == "/r/bb"
        assert record.length == 5
        assert record.is_directory is True
        assert record.exceeds_threshold is False
        assert record.depth == 1

    def test_record_is_frozen(self) -> None:
        """Records cannot be modified after creation."""
        record = PathRecord(path="/r", length=2, is_directory=True, exceeds_threshold=False)
        with pytest.raises(AttributeError):
            record.length = 3  # type: ignore[misc]

    def test_empty_path_rejected(self) -> None:
        """An empty path raises ValueError."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            PathRecord(path="", length=0, is_directory=False, exceeds_threshold=False)

    def test_negative_length_rejected(self) -> None:
        """A negative length raises ValueError."""
        with pytest.raises(ValueError, match="Length cannot be negative"):
            PathRecord(path="/r", length=-1, is_directory=False, exceeds_threshold=False)

    def test_negative_depth_rejected(self) -> None:
        """A negative depth raises ValueError."""
        with pytest.raises(ValueError, match="Depth cannot be negative"):
            PathRecord(path="/r", length=2, is_directory=False, exceeds_threshold=False, depth=-1)

    def test_kind_labels(self) -> None:
        """kind distinguishes files, directories and links."""
        file_record = PathRecord(path="/f", length=2, is_directory=False, exceeds_threshold=False)
        dir_record = PathRecord(path="/d", length=2, is_directory=True, exceeds_threshold=False)
        link_record = PathRecord(
            path="/l", length=2, is_directory=True, exceeds_threshold=False, is_link=True
        )
        assert file_record.kind == "file"
        assert dir_record.kind == "dir"
        assert link_record.kind == "link"


class TestPathRecordCreate:
    """Tests for PathRecord.create classification."""

    @pytest.mark.parametrize("threshold", [0, 1, 10, 25, 26, 27, 240])
    def test_exceeds_matches_length_comparison(self, threshold: int) -> None:
        """exceeds_threshold is exactly length >= threshold."""
        record = PathRecord.create(
            "/r/bb/cccccccccccccccc.txt", threshold=threshold, is_directory=False
        )
        assert record.length == 26
        assert record.exceeds_threshold == (record.length >= threshold)

    def test_length_equal_to_threshold_exceeds(self) -> None:
        """A path exactly at the threshold is flagged."""
        record = PathRecord.create("/r/aaa.txt", threshold=10, is_directory=False)
        assert record.exceeds_threshold is True

    def test_length_below_threshold_does_not_exceed(self) -> None:
        """A path one unit below the threshold is not flagged."""
        record = PathRecord.create("/r/aaa.txt", threshold=11, is_directory=False)
        assert record.exceeds_threshold is False

    def test_unit_changes_classification(self) -> None:
        """The same path can cross the threshold in one unit but not another."""
        path = "/\U0001f600\U0001f600"
        by_chars = PathRecord.create(path, threshold=4, is_directory=False, unit=LengthUnit.CHARS)
        by_utf16 = PathRecord.create(path, threshold=4, is_directory=False, unit=LengthUnit.UTF16)
        assert by_chars.exceeds_threshold is False
        assert by_utf16.exceeds_threshold is True

    def test_create_passes_through_flags(self) -> None:
        """Link flag and depth are stored as given."""
        record = PathRecord.create("/r/l", threshold=0, is_directory=True, is_link=True, depth=1)
        assert record.is_link is True
        assert record.is_directory is True
        assert record.depth == 1
