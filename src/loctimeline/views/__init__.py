"""View models derived from a commit subset."""

from loctimeline.views.files import FileViewModel
from loctimeline.views.formatting import format_full, format_long
from loctimeline.views.narrative import build_narrative
from loctimeline.views.scales import LinearScale, OrdinalScale, SqrtScale, TimeScale
from loctimeline.views.scatter import ScatterViewModel

__all__ = [
    "FileViewModel",
    "ScatterViewModel",
    "build_narrative",
    "format_full",
    "format_long",
    "LinearScale",
    "SqrtScale",
    "TimeScale",
    "OrdinalScale",
]
