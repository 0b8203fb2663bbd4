from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..swipes.model import SwipeEvent


@dataclass(frozen=True)
class Burst:
    """Cụm các lần quẹt liên tiếp, coi như một lần ra/vào thực tế."""

    employee_key: str
    start: datetime
    end: datetime
    swipes: tuple[SwipeEvent, ...]

    @property
    def swipe_count(self) -> int:
        return len(self.swipes)
