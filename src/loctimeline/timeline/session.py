"""Timeline session: load, aggregate and wire everything together."""

import datetime as dt
from pathlib import Path
from typing import Iterable, Optional, Tuple

import structlog

from loctimeline.aggregation import aggregate_commits, compute_stats, sort_commits
from loctimeline.extraction import load_line_records
from loctimeline.models import CommitStats, LineRecord, NarrativeStep, Settings, TimelineSnapshot
from loctimeline.timeline.adapters import ScrollStepAdapter, SliderAdapter
from loctimeline.timeline.state import CutoffStateMachine
from loctimeline.views.narrative import build_narrative

logger = structlog.get_logger(__name__)


class TimelineSession:
    """One interactive timeline over a dataset.

    Commits are aggregated and sorted once, the narrative is built once, and
    the state machine starts with every commit visible.
    """

    def __init__(self, lines: Iterable[LineRecord], settings: Optional[Settings] = None) -> None:
        """Initialize the session.

        Args:
            lines: Validated line records
            settings: Application settings (defaults read from the environment)
        """
        self.settings = settings or Settings()
        self.lines = list(lines)
        self.commits = sort_commits(aggregate_commits(self.lines, self.settings.repo_url))
        self.steps: Tuple[NarrativeStep, ...] = build_narrative(self.commits)

        self.machine = CutoffStateMachine(self.commits, config=self.settings.chart_config())
        self.slider = SliderAdapter(self.machine)
        self.scroller = ScrollStepAdapter(self.machine, self.steps, offset=self.settings.step_offset)

        self.machine.reset()
        logger.info(
            "timeline_session_ready",
            lines=len(self.lines),
            commits=len(self.commits),
        )

    @classmethod
    def from_file(cls, path: Optional[Path] = None, settings: Optional[Settings] = None) -> "TimelineSession":
        """Load a dataset and build a session over it.

        Args:
            path: Dataset path (defaults to ``settings.data_file``)
            settings: Application settings

        Raises:
            LoaderError: If the dataset is missing or malformed
        """
        settings = settings or Settings()
        return cls(load_line_records(path or settings.data_file), settings)

    @property
    def snapshot(self) -> TimelineSnapshot:
        """The currently published snapshot."""
        return self.machine.snapshot

    def overall_stats(self) -> CommitStats:
        """Statistics over the whole history, independent of the cutoff."""
        return compute_stats(self.lines, self.commits)

    def parse_instant(self, text: str) -> dt.datetime:
        """Parse an ISO-8601 instant; naive values take the first commit's offset.

        Raises:
            ValueError: If ``text`` is not ISO-8601
        """
        value = dt.datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
        if value.tzinfo is None:
            tz = self.commits[0].datetime.tzinfo if self.commits else dt.timezone.utc
            value = value.replace(tzinfo=tz)
        return value
