"""Aggregation of line records into commits and summary statistics."""

from loctimeline.aggregation.commits import (
    aggregate_commits,
    build_commit_url,
    flatten_lines,
    group_lines,
    sort_commits,
)
from loctimeline.aggregation.stats import compute_stats

__all__ = [
    "aggregate_commits",
    "build_commit_url",
    "flatten_lines",
    "group_lines",
    "sort_commits",
    "compute_stats",
]
