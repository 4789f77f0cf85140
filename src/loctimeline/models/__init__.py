"""Data models for commit timeline processing."""

from loctimeline.models.config import ChartConfig, Settings
from loctimeline.models.records import Commit, LineRecord, parse_offset
from loctimeline.models.views import (
    AxisTick,
    CommitStats,
    CutoffState,
    FileAggregate,
    NarrativeStep,
    ScatterGeometry,
    ScatterPoint,
    TimelineSnapshot,
)

__all__ = [
    "LineRecord",
    "Commit",
    "parse_offset",
    "CommitStats",
    "AxisTick",
    "ScatterPoint",
    "ScatterGeometry",
    "FileAggregate",
    "NarrativeStep",
    "CutoffState",
    "TimelineSnapshot",
    "ChartConfig",
    "Settings",
]
