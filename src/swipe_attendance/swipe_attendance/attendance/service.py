from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from ..breaks.locator import BreakLocator
from ..bursts.clusterer import BurstClusterer
from ..common.datetime_utils import format_clock
from ..common.validators import require_positive
from ..core.constants import (
    DEFAULT_BURST_THRESHOLD_MINUTES,
    DEFAULT_STATUS_FILTER,
    MAX_REPORTED_WARNINGS,
    PROGRESS_LOG_BATCH,
    ROW_NUMBER_OFFSET,
)
from ..core.enums import EvaluationPolicy, TimestampField
from ..core.exceptions import BatchValidationError, SwipeParseError
from ..shifts.classifier import ShiftWindowClassifier
from ..shifts.model import ShiftInstance
from ..shifts.repository import ShiftTemplateRepository
from ..status.parser import deviation_text, missed_punch, parse_deviations
from ..swipes.model import SwipeEvent
from ..swipes.parser import parse_swipe_event
from .factory import StatusStrategyFactory
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Per-run knobs: merge gap, accepted status codes, allow-list and policy."""

    burst_threshold_minutes: float = DEFAULT_BURST_THRESHOLD_MINUTES
    status_filter: tuple[str, ...] = DEFAULT_STATUS_FILTER
    allowed_employees: Optional[frozenset[str]] = None
    policy: EvaluationPolicy = EvaluationPolicy.STRICT

    @classmethod
    def from_settings(cls, settings: Any) -> "RunConfig":
        allowed = tuple(getattr(settings, "ALLOWED_EMPLOYEES", ()) or ())
        return cls(
            burst_threshold_minutes=require_positive(
                getattr(settings, "BURST_THRESHOLD_MINUTES", DEFAULT_BURST_THRESHOLD_MINUTES),
                "BURST_THRESHOLD_MINUTES",
            ),
            status_filter=tuple(getattr(settings, "STATUS_FILTER", DEFAULT_STATUS_FILTER)),
            allowed_employees=frozenset(allowed) if allowed else None,
            policy=EvaluationPolicy(getattr(settings, "EVALUATION_POLICY", EvaluationPolicy.STRICT.value)),
        )


@dataclass(frozen=True)
class EmployeeProfile:
    employee_id: str
    display_name: str


@dataclass(frozen=True)
class ProcessingResult:
    records: list[AttendanceRecord]
    deviation_records: list[AttendanceRecord]
    policy: EvaluationPolicy
    total_rows: int
    events_accepted: int
    bursts_formed: int
    shift_instances_found: int
    orphan_bursts: int
    filtered_by_status: int = 0
    filtered_by_allow_list: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def records_generated(self) -> int:
        return len(self.records)

    @property
    def records_requiring_review(self) -> int:
        return sum(1 for r in self.records if r.requires_review)

    def summary_message(self) -> str:
        return (
            f"Processed {self.events_accepted} swipes → {self.bursts_formed} bursts → "
            f"{self.shift_instances_found} shifts → {self.records_generated} attendance records"
        )

    def to_dict(self) -> dict:
        return {
            "success": True,
            "policy": self.policy.value,
            "records_processed": self.events_accepted,
            "bursts_detected": self.bursts_formed,
            "shift_instances_found": self.shift_instances_found,
            "attendance_records_generated": self.records_generated,
            "records_requiring_review": self.records_requiring_review,
            "deviation_records_count": len(self.deviation_records),
            "orphan_bursts": self.orphan_bursts,
            "warnings": self.warnings[:MAX_REPORTED_WARNINGS],
            "output_data": [r.to_dict() for r in self.records],
            "deviation_data": [r.to_dict() for r in self.deviation_records],
            "message": self.summary_message(),
            "debug": {
                "total_rows": self.total_rows,
                "filtered_by_status": self.filtered_by_status,
                "filtered_by_allow_list": self.filtered_by_allow_list,
                "invalid_rows": len(self.warnings),
            },
        }


class AttendanceProcessor:
    """Use case: raw swipes in, one attendance record per shift instance out.

    Stages run strictly in order: parse/filter -> bursts -> shift instances
    -> breaks -> status. Nothing is shared between employees.
    """

    def __init__(
        self,
        templates: ShiftTemplateRepository,
        *,
        config: Optional[RunConfig] = None,
        strategy_factory: Optional[StatusStrategyFactory] = None,
        directory: Optional[Mapping[str, EmployeeProfile]] = None,
        break_locator: Optional[BreakLocator] = None,
    ):
        self._templates = templates
        self._config = config or RunConfig()
        self._strategy = (strategy_factory or StatusStrategyFactory()).for_policy(self._config.policy)
        self._directory = dict(directory or {})
        self._clusterer = BurstClusterer(threshold_minutes=self._config.burst_threshold_minutes)
        self._classifier = ShiftWindowClassifier(templates.list_all(), overnight_code=templates.overnight_code)
        self._breaks = break_locator or BreakLocator()

    @property
    def config(self) -> RunConfig:
        return self._config

    def accept_events(self, rows: Iterable[Mapping[str, Any] | SwipeEvent]) -> tuple[list[SwipeEvent], dict]:
        """Parse and filter raw rows; malformed rows become warnings, never errors."""
        swipes: list[SwipeEvent] = []
        warnings: list[str] = []
        filtered_by_status = 0
        filtered_by_allow_list = 0
        total = 0
        allowed = self._config.allowed_employees

        for position, row in enumerate(rows):
            total += 1
            try:
                swipe = parse_swipe_event(row)
            except SwipeParseError as exc:
                message = f"Row {position + ROW_NUMBER_OFFSET}: {exc}"
                warnings.append(message)
                logger.warning("Skipping swipe row: %s", message)
                continue

            if swipe.status_code not in self._config.status_filter:
                filtered_by_status += 1
                continue
            if allowed is not None and swipe.employee_key not in allowed:
                filtered_by_allow_list += 1
                logger.debug("Filtered out employee not on allow-list: %s", swipe.employee_key)
                continue
            swipes.append(swipe)

        stats = {
            "total_rows": total,
            "filtered_by_status": filtered_by_status,
            "filtered_by_allow_list": filtered_by_allow_list,
            "warnings": warnings,
        }
        return swipes, stats

    def process(self, rows: Iterable[Mapping[str, Any] | SwipeEvent]) -> ProcessingResult:
        swipes, stats = self.accept_events(rows)
        if not swipes:
            raise BatchValidationError(
                "No valid records found after filtering",
                total_rows=stats["total_rows"],
                filtered_by_status=stats["filtered_by_status"],
                filtered_by_allow_list=stats["filtered_by_allow_list"],
                invalid_rows=len(stats["warnings"]),
                warnings=stats["warnings"][:MAX_REPORTED_WARNINGS],
            )

        logger.info("Step 1: clustering %d swipes into bursts", len(swipes))
        bursts_by_employee = self._clusterer.cluster(swipes)
        bursts_formed = sum(len(b) for b in bursts_by_employee.values())

        logger.info("Step 2: detecting shifts from %d bursts", bursts_formed)
        classification = self._classifier.classify(bursts_by_employee)
        instances = classification.instances

        logger.info("Step 3: building records for %d shift instances (policy=%s)", len(instances), self._config.policy.value)
        records = []
        for index, instance in enumerate(instances):
            if index and index % PROGRESS_LOG_BATCH == 0:
                logger.debug("Built %d/%d attendance records", index, len(instances))
            records.append(self.build_record(instance))

        deviation_records = [r for r in records if self._is_deviation(r)]
        logger.info(
            "Step 4: %d records, %d deviations, %d requiring review",
            len(records),
            len(deviation_records),
            sum(1 for r in records if r.requires_review),
        )

        return ProcessingResult(
            records=records,
            deviation_records=deviation_records,
            policy=self._config.policy,
            total_rows=stats["total_rows"],
            events_accepted=len(swipes),
            bursts_formed=bursts_formed,
            shift_instances_found=len(instances),
            orphan_bursts=classification.orphan_bursts,
            filtered_by_status=stats["filtered_by_status"],
            filtered_by_allow_list=stats["filtered_by_allow_list"],
            warnings=stats["warnings"],
        )

    def build_record(self, instance: ShiftInstance) -> AttendanceRecord:
        template = self._templates.get_by_code(instance.shift_code)
        breaks = self._breaks.locate(instance.bursts, template)
        check_out = instance.check_out.time() if instance.check_out else None

        decision = self._strategy.evaluate(
            check_in=instance.check_in.time(),
            break_out=breaks.break_out,
            break_in=breaks.break_in,
            check_out=check_out,
            template=template,
        )
        flags = parse_deviations(decision.status)
        profile = self._profile_for(instance)

        return AttendanceRecord(
            date=instance.shift_date,
            employee_id=profile.employee_id,
            employee_name=profile.display_name,
            shift_label=template.display_name,
            shift_code=template.code,
            check_in=format_clock(instance.check_in),
            break_out=format_clock(breaks.break_out),
            break_in=format_clock(breaks.break_in),
            check_out=format_clock(check_out),
            status=decision.status,
            quality_tier=decision.quality_tier,
            completeness_percentage=decision.completeness_percentage,
            requires_review=decision.requires_review,
            missing_timestamps=decision.missing_timestamps,
            check_in_late=deviation_text(flags, TimestampField.CHECK_IN),
            break_out_early=deviation_text(flags, TimestampField.BREAK_OUT),
            break_in_late=deviation_text(flags, TimestampField.BREAK_IN),
            check_out_early=deviation_text(flags, TimestampField.CHECK_OUT),
            missed_punch=missed_punch(decision.status),
        )

    def _profile_for(self, instance: ShiftInstance) -> EmployeeProfile:
        profile = self._directory.get(instance.employee_key)
        if profile:
            return profile
        source_id = instance.bursts[0].swipes[0].employee_id
        return EmployeeProfile(employee_id=source_id or instance.employee_key, display_name=instance.employee_key)

    def _is_deviation(self, record: AttendanceRecord) -> bool:
        needs_review = self._config.policy is EvaluationPolicy.TOLERANT and record.requires_review
        return record.has_deviation or needs_review
