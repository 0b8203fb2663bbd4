"""Time-of-day helpers shared by every pipeline stage.

Times of day are ``datetime.time`` values. Window membership is decided at
minute resolution (seconds are dropped on both the value and the bounds);
threshold comparisons elsewhere use the full value.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

SECONDS_PER_DAY = 24 * 60 * 60

_CLOCK_FORMATS = ("%H:%M:%S", "%H:%M")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> time:
    """Parse ``HH:MM:SS`` (or ``HH:MM``) into a time of day."""
    text = str(value).strip()
    for fmt in _CLOCK_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"invalid time of day: {value!r}")


def format_clock(value: time | datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%H:%M:%S")


def to_minute(value: time) -> time:
    return value.replace(second=0, microsecond=0)


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def in_time_window(value: time, start: time, end: time) -> bool:
    """Inclusive window check; a window with start > end wraps past midnight."""
    v, s, e = to_minute(value), to_minute(start), to_minute(end)
    if s <= e:
        return s <= v <= e
    return v >= s or v <= e


def at_or_after(value: time, start: time, end: time) -> bool:
    """``value >= start``, or the OR-across-midnight form for wrapping windows."""
    v, s, e = to_minute(value), to_minute(start), to_minute(end)
    if s <= e:
        return v >= s
    return v >= s or v <= e


def seconds_after(value: time, anchor: time) -> int:
    """Seconds from ``anchor`` forward to ``value``, wrapping at midnight."""
    return (seconds_of_day(value) - seconds_of_day(anchor)) % SECONDS_PER_DAY


def combine(day: date, value: time) -> datetime:
    return datetime.combine(day, value)


def next_day(day: date) -> date:
    return day + timedelta(days=1)

