"""Status string <-> per-field deviation flags.

Presentation layers use this to highlight cells and fill the compact
"Late"/"Early" and missed-punch columns. Both evaluator policies, and the
older "<Field> Late/Early" phrasing, are understood.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..core.constants import (
    LABEL_EARLY_BREAK_OUT,
    LABEL_EARLY_CHECK_OUT,
    LABEL_LATE_BREAK_IN,
    LABEL_LATE_CHECK_IN,
    MISSING_BRACKET_OPENER,
    STATUS_ON_TIME,
)
from ..core.enums import TimestampField

_MISSING_RE = re.compile(r"\[Missing:\s*([^\]\[]+)\]")

_PHRASINGS = {
    TimestampField.CHECK_IN: (LABEL_LATE_CHECK_IN, "Check-in Late"),
    TimestampField.BREAK_OUT: (LABEL_EARLY_BREAK_OUT, "Break Out Early"),
    TimestampField.BREAK_IN: (LABEL_LATE_BREAK_IN, "Break In Late"),
    TimestampField.CHECK_OUT: (LABEL_EARLY_CHECK_OUT, "Check Out Early"),
}

MISSED_PUNCH_CODES = {
    "Check In": "CI",
    "Check Out": "CO",
    "Break Out": "BTO",
    "Break In": "BTI",
}


@dataclass(frozen=True)
class DeviationFlags:
    check_in_late: bool = False
    break_out_early: bool = False
    break_in_late: bool = False
    check_out_early: bool = False
    has_missing_timestamps: bool = False

    def is_set(self, field: TimestampField) -> bool:
        return {
            TimestampField.CHECK_IN: self.check_in_late,
            TimestampField.BREAK_OUT: self.break_out_early,
            TimestampField.BREAK_IN: self.break_in_late,
            TimestampField.CHECK_OUT: self.check_out_early,
        }[field]


def _mentions(status: str, field: TimestampField) -> bool:
    return any(phrase in status for phrase in _PHRASINGS[field])


def parse_deviations(status: str) -> DeviationFlags:
    if not status or status == STATUS_ON_TIME:
        return DeviationFlags()

    # A bare "Leave Soon" without a field keyword is read as an early check-out.
    bare_leave_soon = (
        "Leave Soon" in status
        and "Break Out" not in status
        and "Check Out" not in status
        and "Break In" not in status
    )
    return DeviationFlags(
        check_in_late=_mentions(status, TimestampField.CHECK_IN),
        break_out_early=_mentions(status, TimestampField.BREAK_OUT),
        break_in_late=_mentions(status, TimestampField.BREAK_IN),
        check_out_early=_mentions(status, TimestampField.CHECK_OUT) or bare_leave_soon,
        has_missing_timestamps=MISSING_BRACKET_OPENER in status,
    )


def extract_missing(status: str) -> list[str]:
    """Short codes (CI/CO/BTO/BTI) for the ``[Missing: ...]`` segment.

    Unknown names pass through unchanged; a malformed bracket gives ``[]``.
    """
    if not status or MISSING_BRACKET_OPENER not in status:
        return []

    match = _MISSING_RE.search(status)
    if not match:
        return []

    items = [item.strip() for item in match.group(1).split(",")]
    return [MISSED_PUNCH_CODES.get(item, item) for item in items if item]


def missed_punch(status: str) -> str:
    return ", ".join(extract_missing(status))


def deviation_text(flags: DeviationFlags, field: TimestampField | str) -> str:
    """``"Late"``/``"Early"``/``""`` for one field's report column."""
    try:
        field = TimestampField(field)
    except ValueError:
        return ""

    if not flags.is_set(field):
        return ""
    if field in (TimestampField.CHECK_IN, TimestampField.BREAK_IN):
        return "Late"
    return "Early"


def serialize_deviations(flags: DeviationFlags, missing_fields: tuple[TimestampField, ...] = ()) -> str:
    """Canonical status for a set of flags, in the evaluator's label order."""
    labels = [_PHRASINGS[f][0] for f in TimestampField if flags.is_set(f)]
    status = ", ".join(labels) if labels else STATUS_ON_TIME

    if flags.has_missing_timestamps:
        names = [f.display_name for f in TimestampField if f in missing_fields] or ["Unknown"]
        status += f" [Missing: {', '.join(names)}]"
    return status
