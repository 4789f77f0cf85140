"""Cutoff state machine: one cutoff instant drives every derived view.

Both input channels (the slider and the scroll narrative) end up in
``CutoffStateMachine.set_cutoff``. Each call recomputes the filtered view
from scratch and derives the statistics, scatter and file views from that
single snapshot before anything is published.
"""

import datetime as dt
from typing import Callable, List, Optional, Sequence, Tuple

import structlog

from loctimeline.aggregation import compute_stats, flatten_lines
from loctimeline.models import ChartConfig, Commit, CutoffState, TimelineSnapshot
from loctimeline.views.files import FileViewModel
from loctimeline.views.formatting import format_long
from loctimeline.views.scales import TimeScale
from loctimeline.views.scatter import ScatterViewModel

logger = structlog.get_logger(__name__)

Listener = Callable[[TimelineSnapshot], None]

PROGRESS_RANGE = (0.0, 100.0)


class CutoffStateMachine:
    """Owns the cutoff time and publishes consistent snapshots.

    The commits must already be sorted ascending by datetime. The progress
    scale maps the full commit time extent onto [0, 100] and is fixed at
    construction.
    """

    def __init__(
        self,
        commits: Sequence[Commit],
        config: Optional[ChartConfig] = None,
        scatter: Optional[ScatterViewModel] = None,
        files: Optional[FileViewModel] = None,
    ) -> None:
        """Initialize the state machine.

        Args:
            commits: Every commit, ascending by datetime
            config: Chart geometry for the default scatter view model
            scatter: Scatter view model (optional)
            files: File view model (optional)
        """
        self.commits: Tuple[Commit, ...] = tuple(commits)
        self.scatter = scatter or ScatterViewModel(config)
        self.files = files or FileViewModel()

        self.time_scale: Optional[TimeScale] = None
        if self.commits:
            self.time_scale = TimeScale(
                domain=(self.commits[0].datetime, self.commits[-1].datetime),
                range=PROGRESS_RANGE,
            )

        self._listeners: List[Listener] = []
        self._snapshot: Optional[TimelineSnapshot] = None

    @property
    def snapshot(self) -> Optional[TimelineSnapshot]:
        """The most recently published snapshot, if any."""
        return self._snapshot

    @property
    def cutoff_time(self) -> Optional[dt.datetime]:
        return self._snapshot.state.cutoff_time if self._snapshot else None

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with every new snapshot."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def progress_for(self, cutoff: dt.datetime) -> float:
        """Slider position for an instant, clamped to [0, 100]."""
        if self.time_scale is None:
            return 0.0
        low, high = PROGRESS_RANGE
        return min(high, max(low, self.time_scale(cutoff)))

    def time_for(self, progress: float) -> Optional[dt.datetime]:
        """Instant for a slider position; None when there are no commits."""
        if self.time_scale is None:
            return None
        return self.time_scale.invert(progress)

    @property
    def display_tz(self) -> Optional[dt.tzinfo]:
        """Zone every published cutoff is expressed in (the first commit's offset)."""
        return self.time_scale.tz if self.time_scale is not None else None

    def filter(self, cutoff: dt.datetime) -> Tuple[Commit, ...]:
        """Commits at or before ``cutoff``, in chronological order."""
        return tuple(commit for commit in self.commits if commit.datetime <= cutoff)

    def _derive(self, cutoff: dt.datetime, files: FileViewModel) -> TimelineSnapshot:
        if self.display_tz is not None:
            cutoff = cutoff.astimezone(self.display_tz)

        state = CutoffState(
            cutoff_time=cutoff,
            progress=self.progress_for(cutoff),
            label=format_long(cutoff),
        )

        commits = self.filter(cutoff)
        lines = flatten_lines(commits)

        stats = compute_stats(lines, commits)
        scatter = self.scatter.update(commits)
        file_views = files.update(commits)

        return TimelineSnapshot(
            state=state,
            commits=commits,
            stats=stats,
            scatter=scatter,
            files=tuple(file_views),
        )

    def compute(self, cutoff: dt.datetime) -> TimelineSnapshot:
        """Derive every view for ``cutoff`` without publishing it.

        Tag colors are previewed on a copy of the color scale, so a preview
        never fixes the color of a tag that has not been published yet.
        """
        return self._derive(cutoff, FileViewModel(self.files.colors.copy()))

    def set_cutoff(self, cutoff: dt.datetime) -> TimelineSnapshot:
        """Move the cutoff and publish the resulting snapshot.

        Args:
            cutoff: New cutoff instant; values outside the commit extent
                select no commits or all of them

        Returns:
            The published TimelineSnapshot
        """
        snapshot = self._derive(cutoff, self.files)
        self._snapshot = snapshot

        logger.debug(
            "cutoff_changed",
            cutoff=snapshot.state.cutoff_time.isoformat(),
            progress=round(snapshot.state.progress, 2),
            commits=snapshot.stats.commits,
        )

        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def reset(self) -> TimelineSnapshot:
        """Publish the initial state: every commit visible.

        With no commits at all the published snapshot is empty and carries
        no cutoff time.
        """
        if self.commits:
            return self.set_cutoff(self.commits[-1].datetime)

        snapshot = TimelineSnapshot(
            state=CutoffState(),
            commits=(),
            stats=compute_stats([], []),
            scatter=self.scatter.update([]),
            files=(),
        )
        self._snapshot = snapshot
        logger.info("timeline_empty")
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot
