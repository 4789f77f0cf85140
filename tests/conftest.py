"""Shared fixtures: small line-record datasets."""

import csv
import tempfile
from pathlib import Path

import pytest

from loctimeline.models import Settings
from loctimeline.timeline import TimelineSession

from tests.factories import C1_TIME, C2_TIME, C3_TIME, CSV_FIELDS, REPO_URL, make_lines


@pytest.fixture
def settings():
    """Settings with a fixed repository URL."""
    return Settings(repo_url=REPO_URL)


@pytest.fixture
def scenario_lines():
    """C1 touches a.js (3 lines); C2 touches a.js (2 lines) and b.js (1 line)."""
    return (
        make_lines("c1", C1_TIME, "a.js", 3)
        + make_lines("c2", C2_TIME, "a.js", 2)
        + make_lines("c2", C2_TIME, "b.js", 1)
    )


@pytest.fixture
def extended_lines(scenario_lines):
    """The two-commit scenario plus a larger third commit touching style.css."""
    return scenario_lines + make_lines("c3", C3_TIME, "style.css", 6, type="css", author="Other User")


@pytest.fixture
def session(scenario_lines, settings):
    """Session over the two-commit scenario."""
    return TimelineSession(scenario_lines, settings)


@pytest.fixture
def extended_session(extended_lines, settings):
    """Session over the three-commit dataset."""
    return TimelineSession(extended_lines, settings)


@pytest.fixture
def csv_dataset(extended_lines):
    """The three-commit dataset written as loc.csv, in shuffled commit order."""
    rows = extended_lines[6:] + extended_lines[:6]
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "loc.csv"
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for line in rows:
                writer.writerow(
                    {
                        "commit": line.commit,
                        "author": line.author,
                        "date": line.date.isoformat(),
                        "time": line.time,
                        "timezone": line.timezone,
                        "datetime": line.datetime.isoformat(),
                        "file": line.file,
                        "type": line.type,
                        "line": line.line,
                        "depth": line.depth,
                        "length": line.length,
                    }
                )
        yield path
