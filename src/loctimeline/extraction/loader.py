"""Line record loading from the per-line dataset (loc.csv)."""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List

import structlog
from pydantic import ValidationError

from loctimeline.models import LineRecord

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = (
    "commit",
    "author",
    "date",
    "time",
    "timezone",
    "datetime",
    "file",
    "type",
    "line",
    "depth",
    "length",
)

# Columns that must be present but may be left empty
OPTIONAL_FIELDS = frozenset({"author", "time", "timezone", "type"})


class LoaderError(ValueError):
    """Raised when the dataset cannot be read or a row is malformed."""

    def __init__(self, message: str, source: str = "", row: int = 0) -> None:
        self.source = source
        self.row = row
        location = f"{source}:{row}" if row else source
        super().__init__(f"{location}: {message}" if location else message)


class LineRecordLoader:
    """Reads line records from CSV or JSON and validates them once.

    Every row is checked for the required fields and converted into a
    ``LineRecord``. Downstream code assumes the records are well formed.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the loader.

        Args:
            path: Path to a ``.csv`` or ``.json`` dataset

        Raises:
            LoaderError: If the path does not exist
        """
        self.path = Path(path)
        if not self.path.exists():
            raise LoaderError("Dataset does not exist", source=str(self.path))

    def load(self) -> List[LineRecord]:
        """Load every record in the dataset.

        Returns:
            Line records in file order

        Raises:
            LoaderError: If the file format is unsupported or a row is malformed
        """
        suffix = self.path.suffix.lower()
        if suffix == ".csv":
            rows = self._read_csv()
        elif suffix == ".json":
            rows = self._read_json()
        else:
            raise LoaderError(f"Unsupported dataset format: {suffix or '(none)'}", source=str(self.path))

        records = list(parse_rows(rows, source=str(self.path)))
        logger.info("line_records_loaded", path=str(self.path), count=len(records))
        return records

    def _read_csv(self) -> Iterator[Dict[str, Any]]:
        with open(self.path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            missing = [name for name in REQUIRED_FIELDS if name not in (reader.fieldnames or [])]
            if missing:
                raise LoaderError(f"Missing columns: {', '.join(missing)}", source=str(self.path))
            yield from reader

    def _read_json(self) -> Iterator[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8-sig") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise LoaderError(f"Invalid JSON: {e}", source=str(self.path)) from e

        if not isinstance(data, list):
            raise LoaderError("Expected a JSON list of records", source=str(self.path))
        yield from data


def parse_rows(rows: Iterable[Dict[str, Any]], source: str = "") -> Iterator[LineRecord]:
    """Validate raw rows into line records.

    Args:
        rows: Mappings with the dataset fields
        source: Name used in error messages

    Yields:
        LineRecord objects

    Raises:
        LoaderError: On the first malformed row (rows are numbered from 1)
    """
    for number, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise LoaderError("Record is not an object", source=source, row=number)

        missing = [
            name for name in REQUIRED_FIELDS
            if name not in OPTIONAL_FIELDS and row.get(name) in (None, "")
        ]
        if missing:
            raise LoaderError(f"Missing field(s): {', '.join(missing)}", source=source, row=number)

        try:
            yield LineRecord(
                commit=str(row["commit"]),
                file=str(row["file"]),
                type=str(row.get("type") or "other"),
                author=str(row.get("author") or ""),
                date=row["date"],
                time=str(row.get("time") or ""),
                timezone=str(row.get("timezone") or ""),
                datetime=row["datetime"],
                line=row["line"],
                depth=row["depth"],
                length=row["length"],
            )
        except ValidationError as e:
            raise LoaderError(f"Invalid record: {e}", source=source, row=number) from e


def load_line_records(path: Path) -> List[LineRecord]:
    """Convenience wrapper around ``LineRecordLoader(path).load()``."""
    return LineRecordLoader(path).load()
