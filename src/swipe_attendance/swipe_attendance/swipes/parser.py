"""Turn raw rows (as delivered by a file reader) into ``SwipeEvent`` values."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Mapping

from ..common.datetime_utils import combine, parse_clock, parse_iso_date
from ..common.validators import is_blank
from ..core.exceptions import SwipeParseError
from .model import SwipeEvent

REQUIRED_COLUMNS = ("Name", "Date", "Time", "Status")


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError as exc:
        raise SwipeParseError(f"invalid date {value!r}") from exc


def _coerce_time(value: Any) -> time:
    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value.replace(microsecond=0)
    try:
        return parse_clock(str(value))
    except ValueError as exc:
        raise SwipeParseError(str(exc)) from exc


def parse_swipe_event(row: Mapping[str, Any] | SwipeEvent) -> SwipeEvent:
    """Build a swipe from a raw row with ``ID``/``Name``/``Date``/``Time``/``Status``.

    Already-built events pass through untouched.
    """
    if isinstance(row, SwipeEvent):
        return row
    if not isinstance(row, Mapping):
        raise SwipeParseError(f"unsupported row type {type(row).__name__}")

    for column in REQUIRED_COLUMNS:
        if is_blank(row.get(column)):
            raise SwipeParseError(f"missing required field '{column}'")

    day = _coerce_date(row["Date"])
    clock = _coerce_time(row["Time"])
    raw_id = row.get("ID")

    return SwipeEvent(
        employee_key=str(row["Name"]).strip(),
        calendar_date=day,
        clock_time=clock,
        timestamp=combine(day, clock),
        status_code=str(row["Status"]).strip(),
        employee_id=None if is_blank(raw_id) else str(raw_id).strip(),
    )
