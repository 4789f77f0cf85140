"""Summary statistics over a commit subset."""

from typing import Sequence

from loctimeline.models import Commit, CommitStats, LineRecord


def compute_stats(lines: Sequence[LineRecord], commits: Sequence[Commit]) -> CommitStats:
    """Reduce a consistent (lines, commits) pair to summary statistics.

    ``lines`` must be exactly the union of the lines owned by ``commits``.
    Empty input is valid and yields all zeros.

    Args:
        lines: Line records of the subset
        commits: Commits of the subset

    Returns:
        CommitStats for the subset
    """
    return CommitStats(
        commits=len(commits),
        files=len({line.file for line in lines}),
        total_lines=len(lines),
        max_depth=max((line.depth for line in lines), default=0),
        longest_line=max((line.length for line in lines), default=0),
        max_lines=max((commit.total_lines for commit in commits), default=0),
        authors=len({commit.author for commit in commits}),
    )
