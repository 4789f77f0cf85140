"""Data models for line records and the commits built from them."""

import datetime as dt
import re
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def parse_offset(text: str) -> dt.timezone:
    """Parse a UTC offset string such as ``-08:00``, ``+0530`` or ``Z``.

    Args:
        text: Offset string

    Returns:
        Fixed-offset timezone

    Raises:
        ValueError: If the string is not a valid offset
    """
    text = text.strip()
    if text in ("Z", "z", ""):
        return dt.timezone.utc

    match = _OFFSET_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid timezone offset: {text!r}")

    sign, hours, minutes = match.groups()
    delta = dt.timedelta(hours=int(hours), minutes=int(minutes))
    return dt.timezone(-delta if sign == "-" else delta)


class LineRecord(BaseModel):
    """One source line's metadata at the moment of a commit."""

    model_config = ConfigDict(frozen=True)

    commit: str = Field(..., description="Commit identifier")
    file: str = Field(..., description="Path of the file containing the line")
    type: str = Field("other", description="Technology tag (js, css, html, ...)")
    author: str = Field("", description="Commit author")
    date: dt.date = Field(..., description="Calendar date of the commit")
    time: str = Field("", description="Wall-clock time of the commit")
    timezone: str = Field("", description="UTC offset of the commit, e.g. -08:00")
    datetime: dt.datetime = Field(..., description="Absolute instant of the commit")
    line: int = Field(..., ge=1, description="1-based line number within the file")
    depth: int = Field(0, ge=0, description="Nesting depth of the line")
    length: int = Field(0, ge=0, description="Character length of the line")

    @field_validator("datetime")
    @classmethod
    def _attach_offset(cls, value: dt.datetime, info: ValidationInfo) -> dt.datetime:
        # Naive instants take the record's own offset so every record compares.
        if value.tzinfo is None:
            return value.replace(tzinfo=parse_offset(info.data.get("timezone", "")))
        return value


class Commit(BaseModel):
    """Aggregate of every LineRecord sharing one commit id.

    The commit owns its line set. ``lines`` is excluded from serialization so
    that a dumped commit stays a compact summary.
    """

    id: str = Field(..., description="Commit identifier")
    url: str = Field(..., description="Link to the commit on the hosting service")
    author: str = Field(..., description="Commit author")
    date: dt.date = Field(..., description="Calendar date of the commit")
    time: str = Field(..., description="Wall-clock time of the commit")
    timezone: str = Field(..., description="UTC offset of the commit")
    datetime: dt.datetime = Field(..., description="Absolute instant of the commit")
    hour_frac: float = Field(..., ge=0, lt=24, description="Hour of day plus minutes/60")
    total_lines: int = Field(..., ge=1, description="Number of constituent line records")
    lines: Tuple[LineRecord, ...] = Field(..., exclude=True, repr=False)

    def files(self) -> List[str]:
        """Distinct file paths touched by this commit, in first-seen order."""
        return list(dict.fromkeys(line.file for line in self.lines))

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f2a9c1",
                "url": "https://github.com/example/portfolio/commit/3f2a9c1",
                "author": "Jane Doe",
                "date": "2024-01-01",
                "time": "10:00:00",
                "timezone": "-08:00",
                "datetime": "2024-01-01T10:00:00-08:00",
                "hour_frac": 10.0,
                "total_lines": 42,
            }
        },
    )
