"""Assign bursts to shift instances.

One forward pass per employee. An unassigned burst whose start falls in a
check-in window opens an instance of that shift; following bursts join it
until the activity window ends or a burst clearly starts another shift type.
Bursts inside the open shift's own check-out window always join it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Mapping, Optional, Sequence

from ..bursts.model import Burst
from ..common.datetime_utils import at_or_after, combine, in_time_window, next_day, to_minute
from .model import ShiftInstance, ShiftTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    instances: list[ShiftInstance]
    orphan_bursts: int = 0
    per_employee: dict[str, int] = field(default_factory=dict)


class ShiftWindowClassifier:
    def __init__(self, templates: Sequence[ShiftTemplate], *, overnight_code: str):
        self._templates = {t.code: t for t in templates}
        self._overnight_code = overnight_code
        # Pre-computed check-in windows (minute resolution) for find_shift_code.
        self._check_in_windows = {
            t.code: (to_minute(t.check_in_start), to_minute(t.check_in_end)) for t in templates
        }

    def find_shift_code(self, value: time) -> Optional[str]:
        """Code of the first template whose check-in window contains ``value``."""
        for code, (start, end) in self._check_in_windows.items():
            if in_time_window(value, start, end):
                return code
        return None

    def activity_window_end(self, opening: Burst, template: ShiftTemplate) -> datetime:
        shift_date = opening.start.date()
        end = template.check_out_end
        if end.hour == 0 or template.code == self._overnight_code:
            return combine(next_day(shift_date), end)
        return combine(shift_date, end)

    def classify(self, bursts_by_employee: Mapping[str, Sequence[Burst]]) -> ClassificationResult:
        instances: list[ShiftInstance] = []
        orphans = 0
        per_employee: dict[str, int] = {}
        total = len(bursts_by_employee)

        for index, (employee_key, bursts) in enumerate(bursts_by_employee.items(), start=1):
            ordered = sorted(bursts, key=lambda b: b.start)
            found, orphan_count = self.classify_employee(
                employee_key, ordered, first_instance_id=len(instances)
            )
            logger.debug(
                "Shift detection %d/%d: %s has %d bursts -> %d shifts",
                index,
                total,
                employee_key,
                len(ordered),
                len(found),
            )
            instances.extend(found)
            orphans += orphan_count
            per_employee[employee_key] = len(found)

        instances.sort(key=lambda s: s.check_in)
        logger.info("Shift detection: %d shift instances, %d orphan bursts", len(instances), orphans)
        return ClassificationResult(instances=instances, orphan_bursts=orphans, per_employee=per_employee)

    def classify_employee(
        self,
        employee_key: str,
        bursts: Sequence[Burst],
        *,
        first_instance_id: int = 0,
    ) -> tuple[list[ShiftInstance], int]:
        """Split one employee's bursts (sorted by start) into shift instances.

        Returns the instances and the number of orphan bursts.
        """
        codes = [self.find_shift_code(b.start.time()) for b in bursts]
        assigned = [False] * len(bursts)
        instances: list[ShiftInstance] = []

        i = 0
        while i < len(bursts):
            if assigned[i] or codes[i] is None:
                i += 1
                continue

            template = self._templates[codes[i]]
            stop = self._assign_forward(bursts, codes, assigned, i, template)
            owned = tuple(bursts[i:stop])
            instances.append(
                ShiftInstance(
                    shift_code=template.code,
                    shift_date=owned[0].start.date(),
                    employee_key=employee_key,
                    instance_id=f"shift_{first_instance_id + len(instances)}",
                    check_in=owned[0].start,
                    check_out=self._latest_check_out(owned, template),
                    bursts=owned,
                )
            )
            i = stop

        return instances, assigned.count(False)

    def _assign_forward(
        self,
        bursts: Sequence[Burst],
        codes: Sequence[Optional[str]],
        assigned: list[bool],
        opening: int,
        template: ShiftTemplate,
    ) -> int:
        """Mark bursts from ``opening`` onward as owned; return the first index not taken."""
        window_end = self.activity_window_end(bursts[opening], template)

        j = opening
        while j < len(bursts):
            candidate = bursts[j]
            if candidate.start > window_end:
                break
            if j > opening and self._starts_other_shift(candidate, codes[j], template):
                break
            assigned[j] = True
            j += 1
        return j

    def _starts_other_shift(self, candidate: Burst, code: Optional[str], current: ShiftTemplate) -> bool:
        value = candidate.start.time()
        if in_time_window(value, current.check_out_start, current.check_out_end):
            return False
        if code is None or code == current.code:
            return False

        # Still a plausible overrun until the other shift's check-out start.
        other = self._templates[code]
        return at_or_after(value, other.check_out_start, other.check_out_end)

    @staticmethod
    def _latest_check_out(bursts: Sequence[Burst], template: ShiftTemplate) -> Optional[datetime]:
        latest: Optional[datetime] = None
        for burst in bursts:
            if not in_time_window(burst.end.time(), template.check_out_start, template.check_out_end):
                continue
            if latest is None or burst.end > latest:
                latest = burst.end
        return latest


def shift_statistics(instances: Sequence[ShiftInstance]) -> dict:
    """Totals per shift code, distinct employees and mean bursts per instance."""
    by_code: dict[str, int] = {}
    total_bursts = 0
    for instance in instances:
        by_code[instance.shift_code] = by_code.get(instance.shift_code, 0) + 1
        total_bursts += len(instance.bursts)

    return {
        "total_shifts": len(instances),
        "shifts_by_type": by_code,
        "employee_count": len({i.employee_key for i in instances}),
        "average_bursts_per_shift": total_bursts / len(instances) if instances else 0,
    }
