from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.enums import QualityTier, Severity, TimestampField


@dataclass(frozen=True)
class MissingTimestamp:
    """Một mốc giờ bị thiếu, kèm giờ kỳ vọng và mức độ nghiêm trọng."""

    field: TimestampField
    severity: Severity
    expected_time: Optional[time] = None

    def to_dict(self) -> dict:
        return {
            "field": self.field.value,
            "expected_time": format_clock(self.expected_time),
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một ca đã dựng lại."""

    date: date
    employee_id: str
    employee_name: str
    shift_label: str
    check_in: str
    break_out: str
    break_in: str
    check_out: str
    status: str
    quality_tier: QualityTier
    completeness_percentage: int
    requires_review: bool
    missing_timestamps: tuple[MissingTimestamp, ...] = ()
    check_in_late: str = ""
    break_out_early: str = ""
    break_in_late: str = ""
    check_out_early: str = ""
    missed_punch: str = ""
    shift_code: str = ""

    @property
    def has_deviation(self) -> bool:
        return "Late" in self.status or "Soon" in self.status

    def to_dict(self) -> dict:
        return {
            "date": self.date.strftime("%Y-%m-%d"),
            "id": self.employee_id,
            "name": self.employee_name,
            "shift": self.shift_label,
            "check_in": self.check_in,
            "break_out": self.break_out,
            "break_in": self.break_in,
            "check_out": self.check_out,
            "status": self.status,
            "data_quality": self.quality_tier.value,
            "completeness_percentage": self.completeness_percentage,
            "requires_review": self.requires_review,
            "missing_timestamps": [m.to_dict() for m in self.missing_timestamps],
            "check_in_late": self.check_in_late,
            "break_out_early": self.break_out_early,
            "break_in_late": self.break_in_late,
            "check_out_early": self.check_out_early,
            "missed_punch": self.missed_punch,
        }
