from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta
from typing import Optional, Sequence

from ..bursts.model import Burst
from ..common.datetime_utils import in_time_window, seconds_after
from ..shifts.model import ShiftTemplate


@dataclass(frozen=True)
class BreakTimes:
    break_out: Optional[time] = None
    break_in: Optional[time] = None


class BreakLocator:
    """Find break-out and break-in swipes inside a shift's break search window.

    Rules (each side is chosen on its own):
    - break-out: a burst starting before the midpoint, followed by at least
      ``minimum_break_gap_minutes`` of silence; the one whose end is closest
      to ``break_checkpoint`` wins and its end time is reported.
    - break-in: a burst starting at or after the midpoint, preceded by at
      least ``minimum_break_gap_minutes`` of silence; the one whose start is
      closest to ``break_end_time`` wins and its start time is reported.
    Ties go to the earlier burst.
    """

    def locate(self, bursts: Sequence[Burst], template: ShiftTemplate) -> BreakTimes:
        ordered = sorted(bursts, key=lambda b: b.start)
        return BreakTimes(
            break_out=self._find_break_out(ordered, template),
            break_in=self._find_break_in(ordered, template),
        )

    def _find_break_out(self, bursts: Sequence[Burst], template: ShiftTemplate) -> Optional[time]:
        min_gap = timedelta(minutes=template.minimum_break_gap_minutes)
        candidates = []
        for index, burst in enumerate(bursts):
            if not self._in_window(burst, template) or not self._before_midpoint(burst, template):
                continue
            follower = bursts[index + 1] if index + 1 < len(bursts) else None
            if follower is not None and follower.start - burst.end < min_gap:
                continue
            value = burst.end.time()
            candidates.append((self._distance(value, template.break_checkpoint, template), index, value))

        if not candidates:
            return None
        return min(candidates)[2]

    def _find_break_in(self, bursts: Sequence[Burst], template: ShiftTemplate) -> Optional[time]:
        min_gap = timedelta(minutes=template.minimum_break_gap_minutes)
        candidates = []
        for index, burst in enumerate(bursts):
            if not self._in_window(burst, template) or self._before_midpoint(burst, template):
                continue
            previous = bursts[index - 1] if index > 0 else None
            if previous is not None and burst.start - previous.end < min_gap:
                continue
            value = burst.start.time()
            candidates.append((self._distance(value, template.break_end_time, template), index, value))

        if not candidates:
            return None
        return min(candidates)[2]

    @staticmethod
    def _in_window(burst: Burst, template: ShiftTemplate) -> bool:
        return in_time_window(burst.start.time(), template.break_search_start, template.break_search_end)

    @staticmethod
    def _before_midpoint(burst: Burst, template: ShiftTemplate) -> bool:
        anchor = template.break_search_start
        return seconds_after(burst.start.time(), anchor) < seconds_after(template.midpoint, anchor)

    @staticmethod
    def _distance(value: time, target: time, template: ShiftTemplate) -> int:
        # Offsets from the window start keep the distance correct across midnight.
        anchor = template.break_search_start
        return abs(seconds_after(value, anchor) - seconds_after(target, anchor))
