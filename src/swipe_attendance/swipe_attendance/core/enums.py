from __future__ import annotations

from enum import Enum


class EvaluationPolicy(str, Enum):
    """Cách đánh giá trạng thái: chặt chẽ hoặc chấp nhận thiếu mốc giờ."""

    STRICT = "strict"
    TOLERANT = "tolerant"


class QualityTier(str, Enum):
    """Mức chất lượng dữ liệu của một bản ghi chấm công."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    CRITICAL = "critical"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimestampField(str, Enum):
    """Bốn mốc giờ của một ca, theo đúng thứ tự hiển thị."""

    CHECK_IN = "checkIn"
    BREAK_OUT = "breakOut"
    BREAK_IN = "breakIn"
    CHECK_OUT = "checkOut"

    @property
    def display_name(self) -> str:
        return {
            TimestampField.CHECK_IN: "Check In",
            TimestampField.BREAK_OUT: "Break Out",
            TimestampField.BREAK_IN: "Break In",
            TimestampField.CHECK_OUT: "Check Out",
        }[self]
