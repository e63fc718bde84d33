"""Tests for CSV serialization of scan records."""

import csv
import io

from longpath.export.csv_export import CSV_HEADER, record_to_row, write_csv
from longpath.models.record import PathRecord


def _record(path: str, length: int, *, directory: bool = False, exceeds: bool = False):
    return PathRecord(path=path, length=length, is_directory=directory, exceeds_threshold=exceeds)


class TestRecordToRow:
    """Tests for record_to_row."""

    def test_booleans_are_lowercase_words(self) -> None:
        """Flags are written as true/false."""
        row = record_to_row(_record("/r/bb", 5, directory=True))
        assert row == ("/r/bb", "5", "true", "false")


class TestWriteCsv:
    """Tests for write_csv."""

    def test_header_and_rows(self) -> None:
        """Output starts with the header followed by one row per record."""
        stream = io.StringIO()
        count = write_csv(
            [
                _record("/r/aaa.txt", 10),
                _record("/r/bb/cccccccccccccccc.txt", 26, exceeds=True),
            ],
            stream,
        )

        assert count == 2
        assert stream.getvalue() == (
            "path,length,is_directory,exceeds_threshold\n"
            "/r/aaa.txt,10,false,false\n"
            "/r/bb/cccccccccccccccc.txt,26,false,true\n"
        )

    def test_empty_writes_header_only(self) -> None:
        """No records still produce a header."""
        stream = io.StringIO()
        assert write_csv([], stream) == 0
        assert stream.getvalue() == ",".join(CSV_HEADER) + "\n"

    def test_comma_in_path_is_quoted(self) -> None:
        """A delimiter inside a path is quoted."""
        stream = io.StringIO()
        write_csv([_record("/r/a,b.txt", 10)], stream)
        assert stream.getvalue().splitlines()[1] == '"/r/a,b.txt",10,false,false'

    def test_quote_in_path_is_doubled(self) -> None:
        """Embedded quotes are doubled inside a quoted field."""
        stream = io.StringIO()
        write_csv([_record('/r/say "hi".txt', 15)], stream)
        assert stream.getvalue().splitlines()[1] == '"/r/say ""hi"".txt",15,false,false'

    def test_newline_in_path_survives_parsing(self) -> None:
        """A path containing a line break parses back as one field."""
        stream = io.StringIO()
        path = "/r/two\nlines.txt"
        write_csv([_record(path, 16)], stream)

        rows = list(csv.reader(io.StringIO(stream.getvalue())))

        assert rows[1] == [path, "16", "false", "false"]

    def test_writes_to_file_path(self, tmp_path) -> None:
        """A path destination is opened and written as UTF-8."""
        target = tmp_path / "out.csv"

        count = write_csv([_record("/r/é.txt", 8)], target)

        assert count == 1
        assert target.read_text(encoding="utf-8").splitlines()[1] == "/r/é.txt,8,false,false"
