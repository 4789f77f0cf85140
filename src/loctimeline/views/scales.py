"""Continuous scales mapping data values to chart coordinates.

The scales follow the conventions of the usual charting libraries: a
``domain`` of data values maps linearly (after an optional transform) onto
a ``range`` of output values. A degenerate domain maps every input to the
middle of the range.
"""

import bisect
import datetime as dt
import math
from typing import Dict, List, Optional, Sequence, Tuple

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _tick_spec(start: float, stop: float, count: int) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1

    if power < 0:
        inc = 10 ** -power / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        return i1, i2, -inc

    inc = 10 ** power * factor
    i1 = _round_half_up(start / inc)
    i2 = _round_half_up(stop / inc)
    if i1 * inc < start:
        i1 += 1
    if i2 * inc > stop:
        i2 -= 1
    return i1, i2, inc


def tick_step(start: float, stop: float, count: int) -> float:
    """Size of a round tick step splitting [start, stop] into about ``count`` parts."""
    if stop < start:
        start, stop = stop, start
    if count <= 0 or start == stop:
        return 0.0
    _, _, inc = _tick_spec(start, stop, count)
    return 1 / -inc if inc < 0 else inc


def linear_ticks(start: float, stop: float, count: int) -> List[float]:
    """Round values between ``start`` and ``stop`` (inclusive), about ``count`` of them."""
    if count <= 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []

    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [(i1 + i) * inc for i in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


class LinearScale:
    """Linear mapping from a numeric domain to a numeric range."""

    def __init__(
        self,
        domain: Sequence[float] = (0.0, 1.0),
        range: Sequence[float] = (0.0, 1.0),
    ) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def _transform(self, value: float) -> float:
        return value

    def _untransform(self, value: float) -> float:
        return value

    def __call__(self, value: float) -> float:
        d0, d1 = (self._transform(d) for d in self.domain)
        r0, r1 = self.range
        t = 0.5 if d1 == d0 else (self._transform(value) - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def invert(self, value: float) -> float:
        """Map a range value back to the domain."""
        d0, d1 = (self._transform(d) for d in self.domain)
        r0, r1 = self.range
        t = 0.5 if r1 == r0 else (value - r0) / (r1 - r0)
        return self._untransform(d0 + t * (d1 - d0))

    def ticks(self, count: int = 10) -> List[float]:
        return linear_ticks(self.domain[0], self.domain[1], count)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain}, range={self.range})"


class SqrtScale(LinearScale):
    """Square-root scale; circle areas grow linearly with the domain value."""

    def _transform(self, value: float) -> float:
        return math.copysign(math.sqrt(abs(value)), value)

    def _untransform(self, value: float) -> float:
        return math.copysign(value * value, value)


# Calendar intervals used for time ticks, with their approximate length in seconds
_SECOND = 1
_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

_TICK_INTERVALS: List[Tuple[str, int, int]] = [
    ("second", 1, _SECOND),
    ("second", 5, 5 * _SECOND),
    ("second", 15, 15 * _SECOND),
    ("second", 30, 30 * _SECOND),
    ("minute", 1, _MINUTE),
    ("minute", 5, 5 * _MINUTE),
    ("minute", 15, 15 * _MINUTE),
    ("minute", 30, 30 * _MINUTE),
    ("hour", 1, _HOUR),
    ("hour", 3, 3 * _HOUR),
    ("hour", 6, 6 * _HOUR),
    ("hour", 12, 12 * _HOUR),
    ("day", 1, _DAY),
    ("day", 2, 2 * _DAY),
    ("week", 1, _WEEK),
    ("month", 1, _MONTH),
    ("month", 3, 3 * _MONTH),
    ("year", 1, _YEAR),
]
_TICK_DURATIONS = [duration for _, _, duration in _TICK_INTERVALS]


class TimeInterval:
    """A calendar interval such as "every 3 hours" or "every month"."""

    def __init__(self, unit: str, step: int = 1) -> None:
        self.unit = unit
        self.step = max(1, int(step))

    def floor(self, value: dt.datetime) -> dt.datetime:
        """Latest interval boundary at or before ``value``."""
        step = self.step
        if self.unit == "second":
            return value.replace(second=value.second // step * step, microsecond=0)
        if self.unit == "minute":
            return value.replace(minute=value.minute // step * step, second=0, microsecond=0)
        if self.unit == "hour":
            return value.replace(hour=value.hour // step * step, minute=0, second=0, microsecond=0)

        midnight = value.replace(hour=0, minute=0, second=0, microsecond=0)
        if self.unit == "day":
            return midnight.replace(day=(value.day - 1) // step * step + 1)
        if self.unit == "week":
            # Weeks start on Sunday
            return midnight - dt.timedelta(days=(value.weekday() + 1) % 7)
        if self.unit == "month":
            return midnight.replace(month=(value.month - 1) // step * step + 1, day=1)
        if self.unit == "year":
            return midnight.replace(year=max(1, value.year // step * step), month=1, day=1)
        raise ValueError(f"Unknown interval unit: {self.unit}")

    def offset(self, value: dt.datetime, count: int = 1) -> dt.datetime:
        """Move ``value`` forward by ``count`` steps."""
        amount = count * self.step
        if self.unit == "second":
            return value + dt.timedelta(seconds=amount)
        if self.unit == "minute":
            return value + dt.timedelta(minutes=amount)
        if self.unit == "hour":
            return value + dt.timedelta(hours=amount)
        if self.unit == "day":
            return value + dt.timedelta(days=amount)
        if self.unit == "week":
            return value + dt.timedelta(weeks=amount)
        if self.unit == "month":
            months = value.month - 1 + amount
            return value.replace(year=value.year + months // 12, month=months % 12 + 1)
        if self.unit == "year":
            return value.replace(year=value.year + amount)
        raise ValueError(f"Unknown interval unit: {self.unit}")

    def ceil(self, value: dt.datetime) -> dt.datetime:
        """Earliest interval boundary at or after ``value``."""
        floored = self.floor(value)
        if floored == value:
            return floored
        return self.floor(self.offset(floored))

    def range(self, start: dt.datetime, stop: dt.datetime) -> List[dt.datetime]:
        """Interval boundaries in [start, stop]."""
        values = []
        current = self.ceil(start)
        while current <= stop:
            values.append(current)
            following = self.floor(self.offset(current))
            current = following if following > current else self.offset(current)
        return values

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TimeInterval) and (self.unit, self.step) == (other.unit, other.step)

    def __repr__(self) -> str:
        return f"TimeInterval({self.unit!r}, {self.step})"


def tick_interval(start: dt.datetime, stop: dt.datetime, count: int) -> TimeInterval:
    """Pick the calendar interval giving about ``count`` ticks over [start, stop]."""
    target = abs((stop - start).total_seconds()) / max(1, count)
    i = bisect.bisect_right(_TICK_DURATIONS, target)

    if i == len(_TICK_INTERVALS):
        years = tick_step(start.timestamp() / _YEAR, stop.timestamp() / _YEAR, count)
        return TimeInterval("year", max(1, round(years)))
    if i == 0:
        return TimeInterval("second", 1)

    if target / _TICK_DURATIONS[i - 1] < _TICK_DURATIONS[i] / target:
        i -= 1
    unit, step, _ = _TICK_INTERVALS[i]
    return TimeInterval(unit, step)


def format_time_tick(value: dt.datetime) -> str:
    """Label a time tick at the coarsest precision that describes it."""
    if TimeInterval("minute").floor(value) < value:
        return value.strftime(":%S")
    if TimeInterval("hour").floor(value) < value:
        return value.strftime("%I:%M")
    if TimeInterval("day").floor(value) < value:
        return value.strftime("%I %p")
    if TimeInterval("month").floor(value) < value:
        if TimeInterval("week").floor(value) < value:
            return value.strftime("%a %d")
        return value.strftime("%b %d")
    if TimeInterval("year").floor(value) < value:
        return value.strftime("%B")
    return value.strftime("%Y")


class TimeScale:
    """Linear mapping from a span of instants to a numeric range.

    Calendar arithmetic (niceness, ticks) happens in the timezone of the
    domain's first instant.
    """

    def __init__(
        self,
        domain: Tuple[dt.datetime, dt.datetime],
        range: Sequence[float] = (0.0, 1.0),
    ) -> None:
        start, stop = domain
        self.tz: Optional[dt.tzinfo] = start.tzinfo
        self.domain = (start, stop.astimezone(self.tz) if self.tz else stop)
        self.range = (float(range[0]), float(range[1]))

    def __call__(self, value: dt.datetime) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = 0.5 if d1 == d0 else (value - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def invert(self, value: float) -> dt.datetime:
        """Map a range value back to an instant."""
        d0, d1 = self.domain
        r0, r1 = self.range
        t = 0.5 if r1 == r0 else (value - r0) / (r1 - r0)
        return d0 + (d1 - d0) * t

    def nice(self, count: int = 10) -> "TimeScale":
        """Copy of this scale with the domain widened to calendar boundaries."""
        d0, d1 = self.domain
        if d0 == d1:
            return TimeScale((d0, d1), self.range)
        interval = tick_interval(d0, d1, count)
        return TimeScale((interval.floor(d0), interval.ceil(d1)), self.range)

    def ticks(self, count: int = 10) -> List[dt.datetime]:
        d0, d1 = self.domain
        if d0 == d1:
            return [d0]
        return tick_interval(d0, d1, count).range(d0, d1)

    def __repr__(self) -> str:
        return f"TimeScale(domain={self.domain}, range={self.range})"


# Ten-color categorical palette (Tableau 10)
TABLEAU10 = (
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
)


class OrdinalScale:
    """Assigns palette entries to categories in first-seen order.

    Assignments are remembered, so a category keeps its color for the
    lifetime of the scale. The palette wraps around once exhausted.
    """

    def __init__(self, palette: Sequence[str] = TABLEAU10) -> None:
        if not palette:
            raise ValueError("Palette must not be empty")
        self.palette = tuple(palette)
        self._assigned: Dict[str, str] = {}

    def __call__(self, category: str) -> str:
        if category not in self._assigned:
            self._assigned[category] = self.palette[len(self._assigned) % len(self.palette)]
        return self._assigned[category]

    def copy(self) -> "OrdinalScale":
        """Independent scale with the same palette and assignments."""
        scale = OrdinalScale(self.palette)
        scale._assigned = dict(self._assigned)
        return scale

    @property
    def categories(self) -> List[str]:
        return list(self._assigned)
