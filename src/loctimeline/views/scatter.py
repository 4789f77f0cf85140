"""Scatterplot view model: commits placed by date and hour of day."""

from typing import Optional, Sequence, Tuple

import structlog

from loctimeline.models import AxisTick, ChartConfig, Commit, ScatterGeometry, ScatterPoint
from loctimeline.views.scales import LinearScale, SqrtScale, TimeScale, format_time_tick

logger = structlog.get_logger(__name__)


def format_hour_tick(value: float) -> str:
    """Label an hour-of-day tick, e.g. ``2`` -> ``"02:00"``."""
    if float(value).is_integer():
        return f"{int(value):02d}:00"
    return f"{value:g}:00"


class ScatterViewModel:
    """Maps a commit subset to chart-ready positions and radii.

    The y scale (hour of day over [0, 24]) is fixed for the session. The x
    scale and the radius scale are built per update from the commits
    currently shown, so the chart always spans only the visible commits and
    an update leaves the view model unchanged.
    """

    def __init__(self, config: Optional[ChartConfig] = None) -> None:
        """Initialize the view model.

        Args:
            config: Chart geometry (defaults to a 700x380 chart)
        """
        self.config = config or ChartConfig()
        self.y_scale = LinearScale(domain=(0, 24), range=(self.config.inner_height, 0))

    def _empty(self) -> ScatterGeometry:
        return ScatterGeometry(
            width=self.config.width,
            height=self.config.height,
            inner_width=self.config.inner_width,
            inner_height=self.config.inner_height,
        )

    def y_ticks(self) -> Tuple[AxisTick, ...]:
        """Hour-of-day axis ticks; identical for every update."""
        return tuple(
            AxisTick(position=self.y_scale(value), label=format_hour_tick(value))
            for value in self.y_scale.ticks(self.config.y_tick_count)
        )

    def update(self, commits: Sequence[Commit]) -> ScatterGeometry:
        """Compute the geometry for the given commits.

        Args:
            commits: Commits currently visible

        Returns:
            ScatterGeometry; empty (no points, no domains) for no commits
        """
        if not commits:
            logger.debug("scatter_cleared")
            return self._empty()

        times = [commit.datetime for commit in commits]
        x_scale = TimeScale(
            domain=(min(times), max(times)),
            range=(0, self.config.inner_width),
        ).nice()

        sizes = [commit.total_lines for commit in commits]
        r_domain = (min(sizes), max(sizes))
        r_scale = SqrtScale(domain=r_domain, range=(self.config.radius_min, self.config.radius_max))

        # Largest first, so smaller circles are drawn on top
        ordered = sorted(commits, key=lambda commit: -commit.total_lines)
        points = tuple(
            ScatterPoint(
                commit_id=commit.id,
                url=commit.url,
                author=commit.author,
                datetime=commit.datetime,
                hour_frac=commit.hour_frac,
                total_lines=commit.total_lines,
                x=x_scale(commit.datetime),
                y=self.y_scale(commit.hour_frac),
                r=r_scale(commit.total_lines),
            )
            for commit in ordered
        )

        x_ticks = tuple(
            AxisTick(position=x_scale(value), label=format_time_tick(value))
            for value in x_scale.ticks(self.config.x_tick_count)
        )

        return ScatterGeometry(
            width=self.config.width,
            height=self.config.height,
            inner_width=self.config.inner_width,
            inner_height=self.config.inner_height,
            points=points,
            x_domain=x_scale.domain,
            r_domain=r_domain,
            x_ticks=x_ticks,
            y_ticks=self.y_ticks(),
        )
