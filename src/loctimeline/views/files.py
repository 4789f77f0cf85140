"""File view model: the visible lines grouped per file."""

from typing import Dict, List, Optional, Sequence

import structlog

from loctimeline.aggregation import flatten_lines
from loctimeline.models import Commit, FileAggregate, LineRecord
from loctimeline.views.scales import OrdinalScale

logger = structlog.get_logger(__name__)


class FileViewModel:
    """Groups the lines of a commit subset by file, largest file first."""

    def __init__(self, colors: Optional[OrdinalScale] = None) -> None:
        """Initialize the view model.

        Args:
            colors: Technology-tag color scale, shared for the whole session
        """
        self.colors = colors or OrdinalScale()

    def update(self, commits: Sequence[Commit]) -> List[FileAggregate]:
        """Build the file listing for the given commits.

        Lines keep the order of the flattened commit lines. Files are sorted
        by descending line count; ties keep their first-seen order.

        Args:
            commits: Commits currently visible

        Returns:
            FileAggregates, empty for no commits
        """
        groups: Dict[str, List[LineRecord]] = {}
        for line in flatten_lines(commits):
            groups.setdefault(line.file, []).append(line)

        files = []
        for name, lines in groups.items():
            # A file's tag is assumed constant; the first line decides.
            tag = lines[0].type or "other"
            files.append(
                FileAggregate(name=name, type=tag, color=self.colors(tag), lines=tuple(lines))
            )

        files.sort(key=lambda aggregate: -aggregate.line_count)
        logger.debug("files_updated", count=len(files))
        return files
