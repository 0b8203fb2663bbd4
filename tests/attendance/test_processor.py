from datetime import date

import pytest

from config.shift_templates import SHIFT_TEMPLATES
from swipe_attendance.attendance.service import AttendanceProcessor, EmployeeProfile, RunConfig
from swipe_attendance.core.enums import EvaluationPolicy, QualityTier
from swipe_attendance.core.exceptions import BatchValidationError
from swipe_attendance.shifts.repository import SettingsShiftTemplateRepository


def _repo():
    return SettingsShiftTemplateRepository(SHIFT_TEMPLATES, overnight_code="C")


def _row(name, day, clock, status="Success", employee_id=""):
    return {"ID": employee_id, "Name": name, "Date": day, "Time": clock, "Status": status}


def _rows():
    return [
        _row("Alice", "2025-03-03", "06:00:10", employee_id="E001"),
        _row("Alice", "2025-03-03", "06:00:40", employee_id="E001"),
        _row("Alice", "2025-03-03", "10:00:05", employee_id="E001"),
        _row("Alice", "2025-03-03", "10:29:50", employee_id="E001"),
        _row("Alice", "2025-03-03", "14:01:00", employee_id="E001"),
        _row("Bob", "2025-03-03", "22:02:00"),
        _row("Bob", "2025-03-03", "22:03:00", status="Failed"),
        _row("Bob", "2025-03-04", "06:10:00"),
        _row("Bob", "2025-03-04", "25:61:00"),
    ]


def test_tolerant_run_end_to_end():
    processor = AttendanceProcessor(_repo(), config=RunConfig(policy=EvaluationPolicy.TOLERANT))

    result = processor.process(_rows())

    assert result.total_rows == 9
    assert result.events_accepted == 7
    assert result.filtered_by_status == 1
    assert result.warnings == ["Row 10: invalid time of day: '25:61:00'"]
    assert result.bursts_formed == 6
    assert result.shift_instances_found == 2
    assert result.orphan_bursts == 0
    assert result.summary_message() == "Processed 7 swipes → 6 bursts → 2 shifts → 2 attendance records"

    alice, bob = result.records
    assert alice.employee_id == "E001"
    assert alice.employee_name == "Alice"
    assert alice.shift_label == "Morning"
    assert (alice.check_in, alice.break_out, alice.break_in, alice.check_out) == (
        "06:00:10",
        "10:00:05",
        "10:29:50",
        "14:01:00",
    )
    assert alice.status == "On Time"
    assert alice.completeness_percentage == 100
    assert alice.requires_review is False

    assert bob.employee_id == "Bob"
    assert bob.date == date(2025, 3, 3)
    assert bob.shift_label == "Night"
    assert bob.check_out == "06:10:00"
    assert bob.status == "On Time [Missing: Break Out, Break In]"
    assert bob.quality_tier == QualityTier.CRITICAL
    assert bob.completeness_percentage == 50
    assert bob.requires_review is True
    assert bob.missed_punch == "BTO, BTI"

    assert result.deviation_records == [bob]
    assert result.records_requiring_review == 1


def test_strict_run_reports_deviations_only():
    rows = _rows() + [_row("Carol", "2025-03-03", "14:07:00"), _row("Carol", "2025-03-03", "21:40:00")]
    processor = AttendanceProcessor(_repo(), config=RunConfig(policy=EvaluationPolicy.STRICT))

    result = processor.process(rows)

    carol = next(r for r in result.records if r.employee_name == "Carol")
    assert carol.shift_label == "Afternoon"
    assert carol.status == "Late Check-in, Leave Soon Check Out"
    assert carol.check_in_late == "Late"
    assert carol.check_out_early == "Early"
    assert carol.missed_punch == ""

    bob = next(r for r in result.records if r.employee_name == "Bob")
    assert bob.status == "On Time"
    assert bob.requires_review is True
    assert [r.employee_name for r in result.deviation_records] == ["Carol"]


def test_directory_and_allow_list():
    processor = AttendanceProcessor(
        _repo(),
        config=RunConfig(allowed_employees=frozenset({"Bob"}), policy=EvaluationPolicy.TOLERANT),
        directory={"Bob": EmployeeProfile(employee_id="E042", display_name="Bob Tran")},
    )

    result = processor.process(_rows())

    assert result.filtered_by_allow_list == 5
    assert len(result.records) == 1
    assert result.records[0].employee_id == "E042"
    assert result.records[0].employee_name == "Bob Tran"


def test_bursts_outside_every_window_are_orphans():
    rows = [_row("Dan", "2025-03-03", "03:00:00"), _row("Dan", "2025-03-03", "06:00:00")]

    result = AttendanceProcessor(_repo()).process(rows)

    assert result.orphan_bursts == 1
    assert result.shift_instances_found == 1
    assert result.records[0].check_out == ""


def test_nothing_left_after_filtering_raises_with_counters():
    rows = [_row("Eve", "2025-03-03", "06:00:00", status="Failed"), {"Name": "Eve", "Date": "2025-03-03"}]

    with pytest.raises(BatchValidationError) as excinfo:
        AttendanceProcessor(_repo()).process(rows)

    details = excinfo.value.to_details()
    assert details["total_rows"] == 2
    assert details["filtered_by_status"] == 1
    assert details["invalid_rows"] == 1
    assert details["warnings"] == ["Row 3: missing required field 'Time'"]


def test_result_to_dict_shape():
    result = AttendanceProcessor(_repo(), config=RunConfig(policy=EvaluationPolicy.TOLERANT)).process(_rows())

    payload = result.to_dict()

    assert payload["success"] is True
    assert payload["policy"] == "tolerant"
    assert payload["attendance_records_generated"] == 2
    assert payload["deviation_records_count"] == 1
    assert payload["debug"]["invalid_rows"] == 1
    assert payload["output_data"][1]["missing_timestamps"] == [
        {"field": "breakOut", "expected_time": "02:00:00", "severity": "low"},
        {"field": "breakIn", "expected_time": "02:45:00", "severity": "medium"},
    ]
