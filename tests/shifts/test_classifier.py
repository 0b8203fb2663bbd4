from datetime import date, datetime, time

from config.shift_templates import SHIFT_TEMPLATES
from swipe_attendance.bursts.model import Burst
from swipe_attendance.shifts.classifier import ShiftWindowClassifier, shift_statistics
from swipe_attendance.shifts.repository import SettingsShiftTemplateRepository
from swipe_attendance.swipes.model import SwipeEvent


def _classifier() -> ShiftWindowClassifier:
    repo = SettingsShiftTemplateRepository(SHIFT_TEMPLATES, overnight_code="C")
    return ShiftWindowClassifier(repo.list_all(), overnight_code=repo.overnight_code)


def _burst(start: datetime, end: datetime | None = None, name: str = "alice") -> Burst:
    end = end or start
    swipe = SwipeEvent(
        employee_key=name,
        calendar_date=start.date(),
        clock_time=start.time(),
        timestamp=start,
        status_code="Success",
    )
    return Burst(employee_key=name, start=start, end=end, swipes=(swipe,))


def test_find_shift_code_uses_check_in_windows():
    classifier = _classifier()

    assert classifier.find_shift_code(time(5, 0)) == "A"
    assert classifier.find_shift_code(time(6, 35, 59)) == "A"
    assert classifier.find_shift_code(time(6, 36)) is None
    assert classifier.find_shift_code(time(13, 59)) == "B"
    assert classifier.find_shift_code(time(22, 0)) == "C"
    assert classifier.find_shift_code(time(3, 0)) is None


def test_morning_shift_collects_breaks_and_checkout():
    bursts = [
        _burst(datetime(2025, 3, 3, 6, 0), datetime(2025, 3, 3, 6, 1)),
        _burst(datetime(2025, 3, 3, 10, 0)),
        _burst(datetime(2025, 3, 3, 10, 30)),
        _burst(datetime(2025, 3, 3, 14, 2), datetime(2025, 3, 3, 14, 3)),
    ]

    instances, orphans = _classifier().classify_employee("alice", bursts)

    assert orphans == 0
    assert len(instances) == 1
    shift = instances[0]
    assert shift.shift_code == "A"
    assert shift.shift_date == date(2025, 3, 3)
    assert shift.check_in == datetime(2025, 3, 3, 6, 0)
    assert shift.check_out == datetime(2025, 3, 3, 14, 3)
    assert len(shift.bursts) == 4


def test_night_shift_crossing_midnight_is_one_instance():
    bursts = [
        _burst(datetime(2025, 3, 3, 22, 0)),
        _burst(datetime(2025, 3, 4, 2, 0)),
        _burst(datetime(2025, 3, 4, 2, 40)),
        _burst(datetime(2025, 3, 4, 6, 5)),
    ]

    instances, _ = _classifier().classify_employee("alice", bursts)

    assert len(instances) == 1
    assert instances[0].shift_code == "C"
    assert instances[0].shift_date == date(2025, 3, 3)
    assert instances[0].check_out == datetime(2025, 3, 4, 6, 5)


def test_afternoon_checkout_window_ending_at_midnight_extends_to_next_day():
    classifier = _classifier()
    opening = _burst(datetime(2025, 3, 3, 14, 0))
    template = SettingsShiftTemplateRepository(SHIFT_TEMPLATES, overnight_code="C").get_by_code("B")

    assert classifier.activity_window_end(opening, template) == datetime(2025, 3, 4, 0, 0)


def test_checkout_priority_beats_other_shift_check_in_window():
    # 22:10 is inside C's check-in window but also inside B's check-out window.
    bursts = [
        _burst(datetime(2025, 3, 3, 14, 0)),
        _burst(datetime(2025, 3, 3, 22, 10)),
    ]

    instances, orphans = _classifier().classify_employee("alice", bursts)

    assert orphans == 0
    assert len(instances) == 1
    assert instances[0].shift_code == "B"
    assert instances[0].check_out == datetime(2025, 3, 3, 22, 10)


def test_swipe_in_other_check_in_window_before_its_checkout_start_is_an_overrun():
    # 13:10 is B's check-in window, but B's check-out window (21:30-00:00)
    # has not started, so it stays with the open morning shift.
    bursts = [
        _burst(datetime(2025, 3, 3, 6, 0)),
        _burst(datetime(2025, 3, 3, 13, 10)),
    ]

    instances, _ = _classifier().classify_employee("alice", bursts)

    assert len(instances) == 1
    assert instances[0].shift_code == "A"
    assert len(instances[0].bursts) == 2
    assert instances[0].check_out is None


def test_swipe_at_or_after_other_shift_checkout_start_opens_new_instance():
    # 21:10 is in C's check-in window and past C's check-out start (05:30),
    # and it is outside B's own check-out window.
    bursts = [
        _burst(datetime(2025, 3, 3, 14, 0)),
        _burst(datetime(2025, 3, 3, 21, 10)),
        _burst(datetime(2025, 3, 4, 6, 10)),
    ]

    instances, orphans = _classifier().classify_employee("alice", bursts)

    assert orphans == 0
    assert [i.shift_code for i in instances] == ["B", "C"]
    assert instances[0].check_out is None
    assert instances[1].check_in == datetime(2025, 3, 3, 21, 10)
    assert instances[1].check_out == datetime(2025, 3, 4, 6, 10)


def test_bursts_outside_any_window_are_orphans():
    bursts = [
        _burst(datetime(2025, 3, 3, 3, 0)),
        _burst(datetime(2025, 3, 3, 6, 0)),
        _burst(datetime(2025, 3, 3, 17, 0)),
    ]

    instances, orphans = _classifier().classify_employee("alice", bursts)

    assert len(instances) == 1
    assert orphans == 2
    assert instances[0].bursts == (bursts[1],)


def test_every_burst_assigned_at_most_once_over_consecutive_days():
    bursts = [
        _burst(datetime(2025, 3, 3, 6, 0)),
        _burst(datetime(2025, 3, 3, 14, 0)),
        _burst(datetime(2025, 3, 4, 6, 0)),
        _burst(datetime(2025, 3, 4, 14, 0)),
    ]

    instances, orphans = _classifier().classify_employee("alice", bursts, first_instance_id=7)

    assert [i.shift_date for i in instances] == [date(2025, 3, 3), date(2025, 3, 4)]
    assert [i.instance_id for i in instances] == ["shift_7", "shift_8"]
    owned = [b for i in instances for b in i.bursts]
    assert len(owned) == len(set(id(b) for b in owned))
    assert len(owned) + orphans == len(bursts)


def test_classify_sorts_instances_across_employees_and_reports_stats():
    classifier = _classifier()
    bursts_by_employee = {
        "bob": [_burst(datetime(2025, 3, 3, 14, 0), name="bob")],
        "alice": [
            _burst(datetime(2025, 3, 3, 6, 0), name="alice"),
            _burst(datetime(2025, 3, 3, 14, 5), name="alice"),
        ],
    }

    result = classifier.classify(bursts_by_employee)

    assert [i.employee_key for i in result.instances] == ["alice", "bob"]
    assert result.per_employee == {"bob": 1, "alice": 1}
    stats = shift_statistics(result.instances)
    assert stats["total_shifts"] == 2
    assert stats["shifts_by_type"] == {"A": 1, "B": 1}
    assert stats["employee_count"] == 2
    assert stats["average_bursts_per_shift"] == 1.5


def test_shift_statistics_empty():
    assert shift_statistics([])["average_bursts_per_shift"] == 0
