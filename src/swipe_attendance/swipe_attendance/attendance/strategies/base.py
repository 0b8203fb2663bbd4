from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from ...common.datetime_utils import parse_clock
from ...common.validators import is_blank
from ...core.constants import (
    LABEL_EARLY_BREAK_OUT,
    LABEL_EARLY_CHECK_OUT,
    LABEL_LATE_BREAK_IN,
    LABEL_LATE_CHECK_IN,
    STATUS_ON_TIME,
)
from ...core.enums import QualityTier
from ...shifts.model import ShiftTemplate
from ..model import MissingTimestamp

ClockValue = Union[time, str, None]


@dataclass(frozen=True)
class StatusDecision:
    status: str
    quality_tier: QualityTier
    completeness_percentage: int
    requires_review: bool
    missing_timestamps: tuple[MissingTimestamp, ...] = ()


def coerce_clock(value: ClockValue) -> Optional[time]:
    """None for absent/blank values, otherwise a time of day."""
    if is_blank(value):
        return None
    if isinstance(value, time):
        return value
    return parse_clock(value)


def deviation_labels(
    *,
    check_in: Optional[time],
    break_out: Optional[time],
    break_in: Optional[time],
    check_out: Optional[time],
    template: ShiftTemplate,
) -> list[str]:
    """Threshold checks shared by both policies; absent values are not compared."""
    labels = []
    if check_in is not None and check_in >= template.late_threshold:
        labels.append(LABEL_LATE_CHECK_IN)
    if break_out is not None and break_out < template.expected_break_out_time:
        labels.append(LABEL_EARLY_BREAK_OUT)
    if break_in is not None and break_in >= template.break_late_threshold:
        labels.append(LABEL_LATE_BREAK_IN)
    if check_out is not None and check_out < template.expected_check_out_time:
        labels.append(LABEL_EARLY_CHECK_OUT)
    return labels


def join_labels(labels: list[str]) -> str:
    return ", ".join(labels) if labels else STATUS_ON_TIME


class StatusStrategy(ABC):
    """Strategy Pattern: encapsulate how we turn four timestamps into a status."""

    @abstractmethod
    def evaluate(
        self,
        *,
        check_in: ClockValue,
        break_out: ClockValue,
        break_in: ClockValue,
        check_out: ClockValue,
        template: ShiftTemplate,
    ) -> StatusDecision:
        raise NotImplementedError
