from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..bursts.model import Burst


@dataclass(frozen=True)
class ShiftTemplate:
    """Thực thể miền (domain): Cấu hình một loại ca (A/B/C) với các khung giờ."""

    code: str
    display_name: str

    check_in_start: time
    check_in_end: time
    shift_start: time
    on_time_cutoff: time
    late_threshold: time

    check_out_start: time
    check_out_end: time
    expected_check_out_time: time

    break_search_start: time
    break_search_end: time
    break_checkpoint: time
    expected_break_out_time: time
    midpoint: time
    minimum_break_gap_minutes: int
    break_end_time: time
    break_on_time_cutoff: time
    break_late_threshold: time


@dataclass(frozen=True)
class ShiftInstance:
    """Một lần làm ca cụ thể của một nhân viên."""

    shift_code: str
    shift_date: date
    employee_key: str
    instance_id: str
    check_in: datetime
    check_out: Optional[datetime]
    bursts: tuple[Burst, ...]
