"""Unit tests for line record loading."""

import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from loctimeline.extraction import LineRecordLoader, LoaderError, load_line_records, parse_rows
from loctimeline.models import LineRecord, parse_offset


def _row(**overrides):
    row = {
        "commit": "abc123",
        "author": "Test User",
        "date": "2024-01-01",
        "time": "10:30:00",
        "timezone": "-08:00",
        "datetime": "2024-01-01T10:30:00-08:00",
        "file": "src/main.js",
        "type": "js",
        "line": "1",
        "depth": "2",
        "length": "40",
    }
    row.update(overrides)
    return row


@pytest.fixture
def temp_dir():
    """Create temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def test_load_csv(csv_dataset):
    """Test loading every row of a CSV dataset."""
    records = load_line_records(csv_dataset)

    assert len(records) == 12
    assert all(isinstance(record, LineRecord) for record in records)
    assert records[0].file == "style.css"
    assert records[0].line == 1
    assert records[0].datetime.tzinfo is not None


def test_load_json(temp_dir):
    """Test loading a JSON list of records."""
    path = temp_dir / "loc.json"
    path.write_text(json.dumps([_row(line=1), _row(line=2, depth=0)]))

    records = LineRecordLoader(path).load()

    assert [record.line for record in records] == [1, 2]
    assert records[1].depth == 0


def test_missing_file(temp_dir):
    """Test that a missing dataset is rejected up front."""
    with pytest.raises(LoaderError, match="does not exist"):
        LineRecordLoader(temp_dir / "missing.csv")


def test_unsupported_format(temp_dir):
    """Test that unknown extensions are rejected."""
    path = temp_dir / "loc.txt"
    path.write_text("")

    with pytest.raises(LoaderError, match="Unsupported dataset format"):
        LineRecordLoader(path).load()


def test_missing_columns(temp_dir):
    """Test that a CSV header without required columns is rejected."""
    path = temp_dir / "loc.csv"
    path.write_text("commit,file\nabc,a.js\n")

    with pytest.raises(LoaderError, match="Missing columns"):
        LineRecordLoader(path).load()


def test_invalid_json(temp_dir):
    """Test that broken JSON is reported as a loader error."""
    path = temp_dir / "loc.json"
    path.write_text("[{")

    with pytest.raises(LoaderError, match="Invalid JSON"):
        LineRecordLoader(path).load()


def test_json_must_be_list(temp_dir):
    """Test that a JSON object at top level is rejected."""
    path = temp_dir / "loc.json"
    path.write_text(json.dumps(_row()))

    with pytest.raises(LoaderError, match="Expected a JSON list"):
        LineRecordLoader(path).load()


class TestParseRows:
    """Test row validation."""

    def test_parses_types(self):
        """Test numeric and temporal conversion."""
        record = next(parse_rows([_row()]))

        assert record.line == 1
        assert record.depth == 2
        assert record.length == 40
        assert record.date.isoformat() == "2024-01-01"
        assert record.datetime.utcoffset() == timedelta(hours=-8)

    def test_missing_required_field(self):
        """Test that an empty commit id is reported with its row number."""
        rows = [_row(), _row(commit="")]

        with pytest.raises(LoaderError) as exc_info:
            list(parse_rows(rows, source="loc.csv"))

        assert exc_info.value.row == 2
        assert "commit" in str(exc_info.value)
        assert "loc.csv:2" in str(exc_info.value)

    def test_negative_depth_rejected(self):
        """Test that negative depths fail validation."""
        with pytest.raises(LoaderError, match="Invalid record"):
            list(parse_rows([_row(depth="-1")]))

    def test_unparseable_datetime_rejected(self):
        """Test that a bad instant fails validation."""
        with pytest.raises(LoaderError, match="Invalid record"):
            list(parse_rows([_row(datetime="yesterday")]))

    def test_empty_type_defaults_to_other(self):
        """Test that a missing technology tag becomes 'other'."""
        record = next(parse_rows([_row(type="")]))
        assert record.type == "other"

    def test_naive_datetime_takes_row_offset(self):
        """Test that a naive instant is interpreted in the row's timezone."""
        record = next(parse_rows([_row(datetime="2024-01-01T10:30:00", timezone="+05:30")]))

        assert record.datetime.utcoffset() == timedelta(hours=5, minutes=30)
        assert record.datetime.hour == 10


class TestParseOffset:
    """Test UTC offset parsing."""

    def test_zulu(self):
        assert parse_offset("Z") == timezone.utc

    def test_with_colon(self):
        assert parse_offset("-08:00") == timezone(timedelta(hours=-8))

    def test_without_colon(self):
        assert parse_offset("+0530") == timezone(timedelta(hours=5, minutes=30))

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid timezone offset"):
            parse_offset("PST")


def test_line_record_is_immutable():
    """Test that line records cannot be modified after loading."""
    record = LineRecord(
        commit="abc",
        file="a.js",
        date="2024-01-01",
        datetime=datetime(2024, 1, 1, tzinfo=timezone.utc),
        line=1,
    )

    with pytest.raises(Exception):
        record.depth = 5


def test_csv_with_byte_order_mark(temp_dir):
    """Test that a UTF-8 byte-order mark does not hide the first column."""
    path = temp_dir / "loc.csv"
    row = _row()
    header = ",".join(row)
    path.write_bytes(("\ufeff" + header + "\n" + ",".join(row.values()) + "\n").encode("utf-8"))

    records = LineRecordLoader(path).load()

    assert records[0].commit == "abc123"


def test_json_with_byte_order_mark(temp_dir):
    """Test that a UTF-8 byte-order mark is accepted in JSON datasets."""
    path = temp_dir / "loc.json"
    path.write_bytes(("\ufeff" + json.dumps([_row()])).encode("utf-8"))

    assert LineRecordLoader(path).load()[0].file == "src/main.js"
