from datetime import time

import pytest

from config.shift_templates import SHIFT_TEMPLATES
from swipe_attendance.attendance.factory import StatusStrategyFactory
from swipe_attendance.attendance.strategies.strict_strategy import StrictStatusStrategy
from swipe_attendance.attendance.strategies.tolerant_strategy import TolerantStatusStrategy
from swipe_attendance.core.enums import EvaluationPolicy, QualityTier, Severity, TimestampField
from swipe_attendance.core.exceptions import ValidationError
from swipe_attendance.shifts.repository import SettingsShiftTemplateRepository

MORNING = SettingsShiftTemplateRepository(SHIFT_TEMPLATES, overnight_code="C").get_by_code("A")


def _tolerant(check_in, break_out, break_in, check_out):
    return TolerantStatusStrategy().evaluate(
        check_in=check_in,
        break_out=break_out,
        break_in=break_in,
        check_out=check_out,
        template=MORNING,
    )


def _strict(check_in, break_out, break_in, check_out):
    return StrictStatusStrategy().evaluate(
        check_in=check_in,
        break_out=break_out,
        break_in=break_in,
        check_out=check_out,
        template=MORNING,
    )


@pytest.mark.parametrize("evaluate", [_tolerant, _strict])
def test_all_on_time(evaluate):
    decision = evaluate("06:00:00", "10:00:00", "10:30:00", "14:00:00")

    assert decision.status == "On Time"
    assert decision.completeness_percentage == 100
    assert decision.quality_tier == QualityTier.COMPLETE
    assert decision.requires_review is False
    assert decision.missing_timestamps == ()


def test_all_four_deviations_in_fixed_order():
    decision = _tolerant(time(6, 5), time(9, 59, 59), time(10, 35), time(13, 59, 59))

    assert decision.status == "Late Check-in, Leave Soon Break Out, Late Break In, Leave Soon Check Out"
    assert decision.quality_tier == QualityTier.COMPLETE


def test_on_time_cutoff_is_still_on_time():
    decision = _strict(time(6, 4, 59), time(10, 0), time(10, 34, 59), time(14, 0))

    assert decision.status == "On Time"


def test_tolerant_missing_breaks_is_critical():
    decision = _tolerant("06:00:00", None, None, "14:00:00")

    assert decision.status == "On Time [Missing: Break Out, Break In]"
    assert decision.completeness_percentage == 50
    assert decision.quality_tier == QualityTier.CRITICAL
    assert decision.requires_review is True
    assert [m.severity for m in decision.missing_timestamps] == [Severity.LOW, Severity.MEDIUM]


def test_tolerant_missing_check_out_forces_review_at_75_percent():
    decision = _tolerant("06:00:00", "10:00:00", "10:30:00", None)

    assert decision.status == "On Time [Missing: Check Out]"
    assert decision.completeness_percentage == 75
    assert decision.quality_tier == QualityTier.PARTIAL
    assert decision.requires_review is True
    entry = decision.missing_timestamps[0]
    assert entry.field == TimestampField.CHECK_OUT
    assert entry.severity == Severity.HIGH
    assert entry.expected_time == time(14, 0)


@pytest.mark.parametrize(
    "break_out, break_in, label, expected_time",
    [
        (None, "10:30:00", "Break Out", time(10, 0)),
        ("10:00:00", "  ", "Break In", time(10, 30)),
    ],
)
def test_tolerant_single_missing_break_needs_no_review(break_out, break_in, label, expected_time):
    decision = _tolerant("06:00:00", break_out, break_in, "14:00:00")

    assert decision.status == f"On Time [Missing: {label}]"
    assert decision.completeness_percentage == 75
    assert decision.quality_tier == QualityTier.PARTIAL
    assert decision.requires_review is False
    assert decision.missing_timestamps[0].expected_time == expected_time


def test_tolerant_no_check_in_is_invalid_regardless_of_other_fields():
    decision = _tolerant("", "09:00:00", "11:00:00", "12:00:00")

    assert decision.status == "INVALID - No Check-In"
    assert decision.completeness_percentage == 0
    assert decision.quality_tier == QualityTier.CRITICAL
    assert decision.requires_review is True
    assert len(decision.missing_timestamps) == 1
    assert decision.missing_timestamps[0].field == TimestampField.CHECK_IN
    assert decision.missing_timestamps[0].severity == Severity.HIGH
    assert decision.missing_timestamps[0].expected_time == time(6, 0)


def test_tolerant_deviation_with_missing_fields():
    decision = _tolerant("06:10:00", "10:00:00", None, None)

    assert decision.status == "Late Check-in [Missing: Break In, Check Out]"
    assert decision.completeness_percentage == 50
    assert decision.requires_review is True


def test_tolerant_missing_fields_are_not_compared():
    decision = _tolerant("06:00:00", None, None, None)

    assert decision.status == "On Time [Missing: Break Out, Break In, Check Out]"
    assert decision.completeness_percentage == 25


def test_strict_skips_absent_fields_without_bracket():
    decision = _strict("06:10:00", None, None, "13:00:00")

    assert decision.status == "Late Check-in, Leave Soon Check Out"
    assert "[Missing:" not in decision.status
    assert decision.completeness_percentage == 50
    assert decision.quality_tier == QualityTier.CRITICAL
    assert decision.requires_review is True


def test_strict_without_check_in_still_reports_quality():
    decision = _strict(None, "10:00:00", "10:30:00", "14:00:00")

    assert decision.status == "On Time"
    assert decision.completeness_percentage == 75
    assert decision.requires_review is True


def test_factory_picks_strategy_from_policy():
    factory = StatusStrategyFactory()

    assert isinstance(factory.for_policy(EvaluationPolicy.STRICT), StrictStatusStrategy)
    assert isinstance(factory.for_policy("tolerant"), TolerantStatusStrategy)
    with pytest.raises(ValidationError):
        factory.for_policy("lenient")
