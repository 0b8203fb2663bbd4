from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class SwipeEvent:
    """Thực thể miền (domain): Một lần quẹt thẻ từ máy chấm công."""

    employee_key: str
    calendar_date: date
    clock_time: time
    timestamp: datetime
    status_code: str
    employee_id: Optional[str] = None
