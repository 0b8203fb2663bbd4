"""Completeness and data-quality helpers for the four attendance timestamps."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import PARTIAL_QUALITY_THRESHOLD, TOTAL_TIMESTAMPS
from ..core.enums import QualityTier, TimestampField


@dataclass(frozen=True)
class CompletenessResult:
    percentage: int
    quality: QualityTier
    requires_review: bool
    present_count: int
    total_count: int
    missing_fields: tuple[TimestampField, ...]


def completeness_percentage(missing_count: int, total_count: int = TOTAL_TIMESTAMPS) -> int:
    return int(round((total_count - missing_count) / total_count * 100))


def quality_tier_for(percentage: int) -> QualityTier:
    if percentage == 100:
        return QualityTier.COMPLETE
    if percentage >= PARTIAL_QUALITY_THRESHOLD:
        return QualityTier.PARTIAL
    return QualityTier.CRITICAL


def requires_review(*, has_check_in: bool, has_check_out: bool, percentage: int) -> bool:
    """Review when check-in is gone, quality is critical, or hours worked are unknown."""
    if not has_check_in:
        return True
    if percentage < PARTIAL_QUALITY_THRESHOLD:
        return True
    return not has_check_out


def calculate_completeness(
    *,
    check_in_present: bool,
    break_out_present: bool,
    break_in_present: bool,
    check_out_present: bool,
) -> CompletenessResult:
    presence = {
        TimestampField.CHECK_IN: check_in_present,
        TimestampField.BREAK_OUT: break_out_present,
        TimestampField.BREAK_IN: break_in_present,
        TimestampField.CHECK_OUT: check_out_present,
    }
    missing = tuple(f for f, present in presence.items() if not present)
    percentage = completeness_percentage(len(missing))

    return CompletenessResult(
        percentage=percentage,
        quality=quality_tier_for(percentage),
        requires_review=requires_review(
            has_check_in=check_in_present,
            has_check_out=check_out_present,
            percentage=percentage,
        ),
        present_count=TOTAL_TIMESTAMPS - len(missing),
        total_count=TOTAL_TIMESTAMPS,
        missing_fields=missing,
    )


def format_completeness(percentage: int) -> str:
    return f"{percentage}% Complete"


def quality_description(quality: QualityTier) -> str:
    return {
        QualityTier.COMPLETE: "All timestamps present",
        QualityTier.PARTIAL: "Some timestamps missing, review recommended",
        QualityTier.CRITICAL: "Critical data missing, requires immediate review",
    }.get(quality, "Unknown quality")
