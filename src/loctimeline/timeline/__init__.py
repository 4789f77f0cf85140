"""Cutoff-synchronized timeline state.

The state machine owns the cutoff instant; the adapters translate slider and
scroll events into it; the session wires a dataset to both.
"""

from loctimeline.timeline.adapters import ScrollStepAdapter, SliderAdapter
from loctimeline.timeline.session import TimelineSession
from loctimeline.timeline.state import CutoffStateMachine

__all__ = [
    "CutoffStateMachine",
    "SliderAdapter",
    "ScrollStepAdapter",
    "TimelineSession",
]
