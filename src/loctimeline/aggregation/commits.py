"""Commit aggregation from line records."""

from typing import Dict, Iterable, List, Sequence

import structlog

from loctimeline.models import Commit, LineRecord

logger = structlog.get_logger(__name__)


def build_commit_url(repo_url: str, commit_id: str) -> str:
    """Link to a commit on the hosting service.

    Args:
        repo_url: Base URL of the repository (trailing slash optional)
        commit_id: Commit identifier

    Returns:
        ``<repo_url>/commit/<commit_id>``
    """
    return f"{repo_url.rstrip('/')}/commit/{commit_id}"


def group_lines(lines: Iterable[LineRecord]) -> Dict[str, List[LineRecord]]:
    """Group line records by exact commit id, keeping first-seen order."""
    groups: Dict[str, List[LineRecord]] = {}
    for line in lines:
        groups.setdefault(line.commit, []).append(line)
    return groups


def aggregate_commits(lines: Iterable[LineRecord], repo_url: str) -> List[Commit]:
    """Build one Commit per distinct commit id.

    Shared fields (author, date, time, timezone, datetime) are taken from the
    first line of each group. The result is in first-seen order; call
    ``sort_commits`` before handing it to anything time-based.

    Args:
        lines: Every line record of the dataset, in any order
        repo_url: Base URL used to derive each commit's url

    Returns:
        List of commits, each owning at least one line
    """
    commits = []
    for commit_id, group in group_lines(lines).items():
        first = group[0]
        commits.append(
            Commit(
                id=commit_id,
                url=build_commit_url(repo_url, commit_id),
                author=first.author,
                date=first.date,
                time=first.time,
                timezone=first.timezone,
                datetime=first.datetime,
                hour_frac=first.datetime.hour + first.datetime.minute / 60,
                total_lines=len(group),
                lines=tuple(group),
            )
        )

    logger.debug("commits_aggregated", count=len(commits))
    return commits


def sort_commits(commits: Sequence[Commit]) -> List[Commit]:
    """Return commits in ascending (stable) datetime order."""
    return sorted(commits, key=lambda commit: commit.datetime)


def flatten_lines(commits: Iterable[Commit]) -> List[LineRecord]:
    """Concatenate the owned lines of each commit, in commit order."""
    return [line for commit in commits for line in commit.lines]
