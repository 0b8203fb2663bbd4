"""Missing-timestamp detection and risk reporting."""

from __future__ import annotations

from datetime import time
from typing import Optional, Sequence, Union

from ..common.datetime_utils import format_clock
from ..common.validators import is_blank
from ..core.constants import MAX_RISK_SCORE, MAX_SEVERITY_TOTAL
from ..core.enums import Severity, TimestampField
from ..shifts.model import ShiftTemplate
from .model import MissingTimestamp

ClockValue = Union[time, str, None]

FIELD_SEVERITY = {
    TimestampField.CHECK_IN: Severity.HIGH,
    TimestampField.BREAK_OUT: Severity.LOW,
    TimestampField.BREAK_IN: Severity.MEDIUM,
    TimestampField.CHECK_OUT: Severity.HIGH,
}

_SEVERITY_SCORE = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


def expected_time_for(field: TimestampField, template: ShiftTemplate) -> time:
    return {
        TimestampField.CHECK_IN: template.shift_start,
        TimestampField.BREAK_OUT: template.expected_break_out_time,
        TimestampField.BREAK_IN: template.break_end_time,
        TimestampField.CHECK_OUT: template.expected_check_out_time,
    }[field]


def missing_entry(field: TimestampField, template: ShiftTemplate) -> MissingTimestamp:
    return MissingTimestamp(
        field=field,
        severity=FIELD_SEVERITY[field],
        expected_time=expected_time_for(field, template),
    )


def detect_missing_timestamps(
    check_in: ClockValue,
    break_out: ClockValue,
    break_in: ClockValue,
    check_out: ClockValue,
    template: ShiftTemplate,
) -> list[MissingTimestamp]:
    values = (
        (TimestampField.CHECK_IN, check_in),
        (TimestampField.BREAK_OUT, break_out),
        (TimestampField.BREAK_IN, break_in),
        (TimestampField.CHECK_OUT, check_out),
    )
    return [missing_entry(f, template) for f, value in values if is_blank(value)]


def missing_bracket(missing: Sequence[MissingTimestamp]) -> str:
    """`` [Missing: Break Out, Check Out]`` or an empty string."""
    if not missing:
        return ""
    return f" [Missing: {', '.join(m.field.display_name for m in missing)}]"


def severity_score(severity: Severity) -> int:
    return _SEVERITY_SCORE.get(severity, 0)


def risk_score(missing: Sequence[MissingTimestamp]) -> int:
    """0-10 scale; 6 severity points (all optional fields missing) maps to 10."""
    if not missing:
        return 0
    total = sum(severity_score(m.severity) for m in missing)
    return min(int(round(total / MAX_SEVERITY_TOTAL * MAX_RISK_SCORE)), MAX_RISK_SCORE)


def format_missing_timestamp(entry: MissingTimestamp) -> str:
    expected: Optional[str] = format_clock(entry.expected_time)
    suffix = f" (expected: {expected})" if expected else ""
    return f"{entry.field.display_name}{suffix} [{entry.severity.value.upper()}]"


def missing_summary(missing: Sequence[MissingTimestamp]) -> str:
    if not missing:
        return "All timestamps present"

    parts = []
    for severity, label in ((Severity.HIGH, "critical"), (Severity.MEDIUM, "medium"), (Severity.LOW, "low")):
        count = sum(1 for m in missing if m.severity == severity)
        if count:
            parts.append(f"{count} {label}")
    return f"{len(missing)} missing ({', '.join(parts)})"
