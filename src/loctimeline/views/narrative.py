"""Narrative step index: one scroll step per commit."""

from typing import Sequence, Tuple

import structlog

from loctimeline.models import Commit, NarrativeStep
from loctimeline.views.formatting import format_full

logger = structlog.get_logger(__name__)

FIRST_COMMIT_PHRASE = "my first commit, and it was glorious"
NEXT_COMMIT_PHRASE = "another glorious commit"


def render_step_text(date_label: str, phrase: str, total_lines: int, file_count: int) -> str:
    """Plain-text body of a narrative step."""
    return (
        f"On {date_label}, I made {phrase}. "
        f"I edited {total_lines} lines across {file_count} files. "
        "Then I looked over all I had made, and I saw that it was very good."
    )


def build_narrative(commits: Sequence[Commit]) -> Tuple[NarrativeStep, ...]:
    """Build the narrative over the full, time-sorted commit sequence.

    Args:
        commits: Every commit, ascending by datetime (never filtered)

    Returns:
        One NarrativeStep per commit, in the same order
    """
    steps = []
    for index, commit in enumerate(commits):
        date_label = format_full(commit.datetime)
        phrase = FIRST_COMMIT_PHRASE if index == 0 else NEXT_COMMIT_PHRASE
        file_count = len(commit.files())
        steps.append(
            NarrativeStep(
                index=index,
                commit_id=commit.id,
                url=commit.url,
                datetime=commit.datetime,
                total_lines=commit.total_lines,
                file_count=file_count,
                date_label=date_label,
                phrase=phrase,
                text=render_step_text(date_label, phrase, commit.total_lines, file_count),
            )
        )

    logger.debug("narrative_built", steps=len(steps))
    return tuple(steps)
