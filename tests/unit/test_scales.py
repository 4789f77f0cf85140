"""Unit tests for chart scales."""

from datetime import datetime, timedelta, timezone

import pytest

from loctimeline.views.scales import (
    TABLEAU10,
    LinearScale,
    OrdinalScale,
    SqrtScale,
    TimeInterval,
    TimeScale,
    format_time_tick,
    linear_ticks,
    tick_interval,
)

UTC = timezone.utc


def _at(*args):
    return datetime(*args, tzinfo=UTC)


class TestLinearTicks:
    """Test round tick generation."""

    def test_hours_of_day(self):
        """Test the hour axis: about 8 ticks over a day gives every 2 hours."""
        assert linear_ticks(0, 24, 8) == [float(h) for h in range(0, 25, 2)]

    def test_fractional_steps(self):
        """Test ticks smaller than one."""
        assert linear_ticks(0, 1, 5) == pytest.approx([0, 0.2, 0.4, 0.6, 0.8, 1.0])

    def test_reversed_domain(self):
        """Test that a reversed domain gives descending ticks."""
        assert linear_ticks(10, 0, 2) == [10.0, 5.0, 0.0]

    def test_degenerate(self):
        """Test a zero-width domain and a zero count."""
        assert linear_ticks(3, 3, 5) == [3]
        assert linear_ticks(0, 10, 0) == []


class TestLinearScale:
    """Test linear and square-root scales."""

    def test_maps_and_inverts(self):
        """Test forward and inverse mapping with an inverted range."""
        scale = LinearScale(domain=(0, 24), range=(320, 0))

        assert scale(0) == 320
        assert scale(12) == 160
        assert scale(24) == 0
        assert scale.invert(80) == pytest.approx(18)

    def test_degenerate_domain_maps_to_middle(self):
        """Test that a zero-width domain maps to the middle of the range."""
        assert LinearScale(domain=(5, 5), range=(0, 10))(5) == 5

    def test_sqrt(self):
        """Test the square-root transform."""
        scale = SqrtScale(domain=(1, 4), range=(3, 18))

        assert scale(1) == pytest.approx(3)
        assert scale(4) == pytest.approx(18)
        assert scale(2.25) == pytest.approx(10.5)
        assert scale.invert(10.5) == pytest.approx(2.25)

    def test_sqrt_degenerate(self):
        """Test that equal sizes all get the middle radius."""
        assert SqrtScale(domain=(3, 3), range=(3, 18))(3) == pytest.approx(10.5)


class TestTimeScale:
    """Test time scales."""

    def test_maps_extent_to_range(self):
        """Test the progress mapping over a commit extent."""
        start, end = _at(2024, 1, 1, 10), _at(2024, 1, 2, 12)
        scale = TimeScale(domain=(start, end), range=(0, 100))

        assert scale(start) == 0
        assert scale(end) == 100
        assert scale(start + (end - start) / 2) == pytest.approx(50)

    def test_invert_is_exact_at_ends(self):
        """Test that the slider ends give back the exact extent."""
        start, end = _at(2024, 1, 1, 10), _at(2024, 1, 2, 12)
        scale = TimeScale(domain=(start, end), range=(0, 100))

        assert scale.invert(0) == start
        assert scale.invert(100) == end
        assert scale.invert(50) == _at(2024, 1, 1, 23)

    def test_degenerate_domain(self):
        """Test a single-instant domain."""
        moment = _at(2024, 1, 1, 10)
        scale = TimeScale(domain=(moment, moment), range=(0, 100))

        assert scale(moment) == 50
        assert scale.invert(30) == moment

    def test_nice_extends_to_interval_boundaries(self):
        """Test that nice widens the domain to the chosen interval."""
        scale = TimeScale(domain=(_at(2024, 1, 1, 10), _at(2024, 1, 2, 12)), range=(0, 630)).nice()

        assert scale.domain == (_at(2024, 1, 1, 9), _at(2024, 1, 2, 12))

    def test_domain_uses_first_timezone(self):
        """Test that the end of the domain is expressed in the start's offset."""
        pacific = timezone(timedelta(hours=-8))
        scale = TimeScale(domain=(datetime(2024, 1, 1, tzinfo=pacific), _at(2024, 1, 2)), range=(0, 1))

        assert scale.domain[1].utcoffset() == timedelta(hours=-8)
        assert scale.domain[1] == _at(2024, 1, 2)

    def test_ticks(self):
        """Test tick generation over a week."""
        scale = TimeScale(domain=(_at(2024, 1, 1), _at(2024, 1, 8)), range=(0, 100))
        ticks = scale.ticks(6)

        assert ticks[0] == _at(2024, 1, 1)
        assert all(b - a == timedelta(days=1) for a, b in zip(ticks, ticks[1:]))
        assert ticks[-1] == _at(2024, 1, 8)


class TestTimeInterval:
    """Test calendar intervals."""

    def test_tick_interval_choice(self):
        """Test that a 26 hour span picks 3-hour ticks."""
        assert tick_interval(_at(2024, 1, 1, 10), _at(2024, 1, 2, 12), 10) == TimeInterval("hour", 3)

    def test_long_spans_use_years(self):
        """Test that decades pick multi-year intervals."""
        interval = tick_interval(_at(2000, 1, 1), _at(2040, 1, 1), 10)

        assert interval.unit == "year"
        assert interval.step == 5

    def test_floor_and_ceil(self):
        """Test floor and ceil for several units."""
        moment = _at(2024, 1, 17, 13, 47, 12)

        assert TimeInterval("hour", 3).floor(moment) == _at(2024, 1, 17, 12)
        assert TimeInterval("hour", 3).ceil(moment) == _at(2024, 1, 17, 15)
        assert TimeInterval("month").ceil(moment) == _at(2024, 2, 1)
        assert TimeInterval("year").floor(moment) == _at(2024, 1, 1)
        assert TimeInterval("minute", 15).floor(moment) == _at(2024, 1, 17, 13, 45)

    def test_week_starts_on_sunday(self):
        """Test that weeks are floored to Sunday midnight."""
        assert TimeInterval("week").floor(_at(2024, 1, 3, 8)) == _at(2023, 12, 31)

    def test_ceil_of_boundary_is_identity(self):
        """Test that a boundary is its own ceiling."""
        assert TimeInterval("day").ceil(_at(2024, 1, 3)) == _at(2024, 1, 3)

    def test_month_offset_rolls_year(self):
        """Test that month arithmetic wraps into the next year."""
        assert TimeInterval("month", 3).offset(_at(2024, 11, 1)) == _at(2025, 2, 1)


def test_format_time_tick():
    """Test tick labels at each precision."""
    assert format_time_tick(_at(2024, 1, 1)) == "2024"
    assert format_time_tick(_at(2024, 2, 1)) == "February"
    assert format_time_tick(_at(2024, 1, 7)) == "Jan 07"
    assert format_time_tick(_at(2024, 1, 3)) == "Wed 03"
    assert format_time_tick(_at(2024, 1, 3, 15)) == "03 PM"
    assert format_time_tick(_at(2024, 1, 3, 15, 30)) == "03:30"


class TestOrdinalScale:
    """Test categorical color assignment."""

    def test_first_seen_order(self):
        """Test that categories take palette entries in order and keep them."""
        colors = OrdinalScale()

        assert colors("js") == TABLEAU10[0]
        assert colors("css") == TABLEAU10[1]
        assert colors("js") == TABLEAU10[0]
        assert colors.categories == ["js", "css"]

    def test_wraps_around(self):
        """Test that the palette repeats after it is exhausted."""
        colors = OrdinalScale(palette=["red", "blue"])
        assigned = [colors(tag) for tag in ["a", "b", "c"]]

        assert assigned == ["red", "blue", "red"]

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            OrdinalScale(palette=[])
