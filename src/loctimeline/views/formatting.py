"""Display formatting for instants."""

import datetime as dt


def format_short_time(value: dt.datetime) -> str:
    """12-hour clock time, e.g. ``9:05 PM``."""
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def format_long(value: dt.datetime) -> str:
    """Long date and short time, e.g. ``January 1, 2024 at 10:00 AM``."""
    return f"{value:%B} {value.day}, {value.year} at {format_short_time(value)}"


def format_full(value: dt.datetime) -> str:
    """Full date and short time, e.g. ``Monday, January 1, 2024 at 10:00 AM``."""
    return f"{value:%A}, {format_long(value)}"
