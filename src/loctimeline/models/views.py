"""Data models for the view state published after each cutoff change."""

import datetime as dt
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from loctimeline.models.records import Commit, LineRecord


class CommitStats(BaseModel):
    """Summary statistics over a commit subset and its lines."""

    model_config = ConfigDict(frozen=True)

    commits: int = Field(0, description="Number of commits")
    files: int = Field(0, description="Number of distinct files")
    total_lines: int = Field(0, description="Number of line records")
    max_depth: int = Field(0, description="Deepest nesting level of any line")
    longest_line: int = Field(0, description="Length of the longest line")
    max_lines: int = Field(0, description="Line count of the largest single commit")
    authors: int = Field(0, description="Number of distinct commit authors")


class AxisTick(BaseModel):
    """A tick on a chart axis: pixel offset plus its label."""

    model_config = ConfigDict(frozen=True)

    position: float
    label: str


class ScatterPoint(BaseModel):
    """Chart-ready geometry for one commit."""

    model_config = ConfigDict(frozen=True)

    commit_id: str
    url: str
    author: str
    datetime: dt.datetime
    hour_frac: float
    total_lines: int
    x: float = Field(..., description="Horizontal position, inner chart coordinates")
    y: float = Field(..., description="Vertical position, inner chart coordinates")
    r: float = Field(..., description="Circle radius")


class ScatterGeometry(BaseModel):
    """Everything the rendering layer needs to draw the scatterplot."""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    inner_width: int
    inner_height: int
    points: Tuple[ScatterPoint, ...] = ()
    x_domain: Optional[Tuple[dt.datetime, dt.datetime]] = None
    r_domain: Optional[Tuple[int, int]] = None
    x_ticks: Tuple[AxisTick, ...] = ()
    y_ticks: Tuple[AxisTick, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to draw."""
        return not self.points


class FileAggregate(BaseModel):
    """Line records of one file within a filtered view."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="File path")
    type: str = Field(..., description="Technology tag taken from the file's first line")
    color: str = Field(..., description="Categorical color for the technology tag")
    lines: Tuple[LineRecord, ...] = Field(..., repr=False)

    @computed_field
    @property
    def line_count(self) -> int:
        return len(self.lines)


class NarrativeStep(BaseModel):
    """One scroll step of the commit narrative."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Position in the narrative")
    commit_id: str
    url: str
    datetime: dt.datetime
    total_lines: int
    file_count: int = Field(..., description="Distinct files touched by the commit")
    date_label: str = Field(..., description="Full date and short time of the commit")
    phrase: str = Field(..., description="Link text for the commit")
    text: str = Field(..., description="Rendered step text")

    @property
    def is_first(self) -> bool:
        return self.index == 0


class CutoffState(BaseModel):
    """The authoritative cutoff and the slider state derived from it."""

    model_config = ConfigDict(frozen=True)

    cutoff_time: Optional[dt.datetime] = Field(None, description="Current cutoff instant")
    progress: float = Field(0.0, ge=0, le=100, description="Slider position in [0, 100]")
    label: str = Field("", description="Formatted cutoff for display")


class TimelineSnapshot(BaseModel):
    """All derived views for one cutoff, computed from a single filtered view."""

    model_config = ConfigDict(frozen=True)

    state: CutoffState
    commits: Tuple[Commit, ...] = Field(..., description="Commits at or before the cutoff")
    stats: CommitStats
    scatter: ScatterGeometry
    files: Tuple[FileAggregate, ...] = ()

    @property
    def commit_ids(self) -> Tuple[str, ...]:
        return tuple(commit.id for commit in self.commits)
