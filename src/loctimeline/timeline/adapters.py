"""Input adapters translating raw UI events into a cutoff instant."""

from typing import Optional, Sequence, Union

import structlog

from loctimeline.models import Commit, NarrativeStep, TimelineSnapshot
from loctimeline.timeline.state import PROGRESS_RANGE, CutoffStateMachine

logger = structlog.get_logger(__name__)


class SliderAdapter:
    """Turns a slider position in [0, 100] into a cutoff."""

    def __init__(self, machine: CutoffStateMachine) -> None:
        self.machine = machine

    def on_input(self, value: float) -> Optional[TimelineSnapshot]:
        """Handle a slider input event.

        Args:
            value: Slider position; clamped into [0, 100]

        Returns:
            The published snapshot, or None when there are no commits
        """
        low, high = PROGRESS_RANGE
        position = min(high, max(low, float(value)))

        cutoff = self.machine.time_for(position)
        if cutoff is None:
            logger.debug("slider_ignored", reason="no_commits")
            return None

        logger.debug("slider_input", source="slider", position=position)
        return self.machine.set_cutoff(cutoff)


class ScrollStepAdapter:
    """Turns narrative step-enter events into a cutoff.

    The scroll detection itself lives outside; it reports which step crossed
    ``offset`` (a fraction of the viewport height).
    """

    def __init__(
        self,
        machine: CutoffStateMachine,
        steps: Sequence[NarrativeStep],
        offset: float = 0.6,
    ) -> None:
        self.machine = machine
        self.steps = tuple(steps)
        self.offset = offset

    def on_step_enter(self, index: int) -> Optional[TimelineSnapshot]:
        """Handle the viewport reaching narrative step ``index``.

        Returns:
            The published snapshot, or None for an unknown step
        """
        if not 0 <= index < len(self.steps):
            logger.warning("unknown_narrative_step", index=index, steps=len(self.steps))
            return None

        step = self.steps[index]
        logger.debug("step_entered", source="scroll", index=index, commit=step.commit_id)
        return self.machine.set_cutoff(step.datetime)

    def on_commit(self, commit: Union[Commit, NarrativeStep]) -> TimelineSnapshot:
        """Move the cutoff to a commit's time."""
        return self.machine.set_cutoff(commit.datetime)
