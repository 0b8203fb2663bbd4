from __future__ import annotations

from ...shifts.model import ShiftTemplate
from ..completeness import completeness_percentage, quality_tier_for, requires_review
from ..missing import detect_missing_timestamps
from .base import ClockValue, StatusDecision, StatusStrategy, coerce_clock, deviation_labels, join_labels


class StrictStatusStrategy(StatusStrategy):
    """Deviation labels only; absent fields are skipped, never named in the status."""

    def evaluate(
        self,
        *,
        check_in: ClockValue,
        break_out: ClockValue,
        break_in: ClockValue,
        check_out: ClockValue,
        template: ShiftTemplate,
    ) -> StatusDecision:
        ci, bo, bi, co = (coerce_clock(v) for v in (check_in, break_out, break_in, check_out))
        status = join_labels(deviation_labels(check_in=ci, break_out=bo, break_in=bi, check_out=co, template=template))

        # Quality metadata still follows presence, so every record is comparable.
        missing = detect_missing_timestamps(ci, bo, bi, co, template)
        percentage = completeness_percentage(len(missing))
        return StatusDecision(
            status=status,
            quality_tier=quality_tier_for(percentage),
            completeness_percentage=percentage,
            requires_review=requires_review(
                has_check_in=ci is not None,
                has_check_out=co is not None,
                percentage=percentage,
            ),
            missing_timestamps=tuple(missing),
        )
