from __future__ import annotations

from ...core.constants import STATUS_INVALID_NO_CHECK_IN
from ...core.enums import QualityTier, TimestampField
from ...shifts.model import ShiftTemplate
from ..completeness import completeness_percentage, quality_tier_for
from ..missing import detect_missing_timestamps, missing_bracket, missing_entry
from .base import ClockValue, StatusDecision, StatusStrategy, coerce_clock, deviation_labels, join_labels


class TolerantStatusStrategy(StatusStrategy):
    """Accept missing break/check-out swipes and report them in the status.

    Check-in stays mandatory: without it the record is invalid.
    """

    def evaluate(
        self,
        *,
        check_in: ClockValue,
        break_out: ClockValue,
        break_in: ClockValue,
        check_out: ClockValue,
        template: ShiftTemplate,
    ) -> StatusDecision:
        ci = coerce_clock(check_in)
        if ci is None:
            return StatusDecision(
                status=STATUS_INVALID_NO_CHECK_IN,
                quality_tier=QualityTier.CRITICAL,
                completeness_percentage=0,
                requires_review=True,
                missing_timestamps=(missing_entry(TimestampField.CHECK_IN, template),),
            )

        bo, bi, co = (coerce_clock(v) for v in (break_out, break_in, check_out))
        missing = detect_missing_timestamps(ci, bo, bi, co, template)
        status = join_labels(deviation_labels(check_in=ci, break_out=bo, break_in=bi, check_out=co, template=template))
        status += missing_bracket(missing)

        percentage = completeness_percentage(len(missing))
        tier = quality_tier_for(percentage)
        check_out_missing = any(m.field == TimestampField.CHECK_OUT for m in missing)

        return StatusDecision(
            status=status,
            quality_tier=tier,
            completeness_percentage=percentage,
            requires_review=tier == QualityTier.CRITICAL or check_out_missing,
            missing_timestamps=tuple(missing),
        )
