from datetime import date, datetime

import pytest

from attendance_engine.attendance.processor import DayAttendanceProcessor, daily_salary_for, process_one_date
from attendance_engine.core.enums import DeductionType, HolidayType, StatusKind
from attendance_engine.core.exceptions import ConfigurationError
from attendance_engine.employees.model import Employee, Employment
from attendance_engine.holidays.model import Holiday, build_holiday_map
from attendance_engine.rules.model import AttendanceRules, LateDeductionRules, LeaveRules
from attendance_engine.shifts.model import FlexibleTime, ShiftSchedule, ShiftTimes

NOW = datetime(2025, 2, 1, 9, 0, 0)
WEEKDAYS = frozenset({"Monday", "Tuesday", "Wednesday", "Thursday", "Friday"})

DAY_SHIFT = ShiftSchedule(
    shift_id="day",
    name="Day",
    default_times=ShiftTimes("08:00", "16:00"),
    flexible_time=FlexibleTime(enabled=True, grace_minutes=10),
    days=WEEKDAYS,
    date_overrides={"2025-01-08": ShiftTimes("10:00", "14:00")},
)
NIGHT_SHIFT = ShiftSchedule(
    shift_id="night",
    name="Night",
    default_times=ShiftTimes("22:00", "06:00"),
    days=WEEKDAYS | {"Saturday", "Sunday"},
)
RULES = AttendanceRules(
    late_deductions=LateDeductionRules(
        enabled=True,
        deduction_type=DeductionType.FIXED,
        fixed_amount_per_minute=10,
        max_deduction_time=90,
        half_day_threshold=120,
        absent_threshold=240,
    ),
    leave_rules=LeaveRules(unsanctioned_multiplier=2),
)


def punches(first_in=None, last_out=None):
    logs = []
    if first_in:
        logs.append({"time": first_in, "inOut": "DutyOn", "mode": "FP"})
    if last_out:
        logs.append({"time": last_out, "inOut": "DutyOff", "mode": "FP"})
    return logs


def employee(day: str, logs=None, *, shift_id="day", **prior):
    # 31000 a month gives 1000 a day in any 31-day month
    month_year = f"{day[5:7]}-{day[:4]}"
    record = dict(prior)
    if logs is not None:
        record["logs"] = logs
    return Employee(
        employee_id="e1",
        employment=Employment(shift_id=shift_id, salary_amount=31000),
        attendance={month_year: {day: record}},
    )


def run(emp, day, *, schedule=DAY_SHIFT, holidays=None):
    processor = DayAttendanceProcessor()
    return processor.process(emp, schedule, RULES, build_holiday_map(holidays or []), date.fromisoformat(day), now=NOW)


def test_on_time_within_grace():
    rec = run(employee("2025-01-06", punches("8:09:00 am", "4:00:00 pm")), "2025-01-06")

    assert rec.status_text == "On Time"
    assert rec.deduction_amount == 0
    assert rec.deduction_remarks == "No deduction - On time attendance"
    assert rec.working_hours == "7h 51m"
    assert (rec.shift_start, rec.shift_end) == ("08:00", "16:00")
    assert rec.day_of_week == "Monday"
    assert rec.is_work_day is True


def test_late_is_measured_from_end_of_grace():
    rec = run(employee("2025-01-06", punches("8:55:00 am", "4:00:00 pm")), "2025-01-06")

    assert rec.status_text == "Late In (45 min)"
    assert rec.attendance_deduction == 0
    assert rec.deduction_amount == 450


def test_date_override_drives_evaluation():
    # Wednesday with a 10:00-14:00 override: 10:05 is inside grace, 14:00 is on time.
    rec = run(employee("2025-01-08", punches("10:05", "14:00")), "2025-01-08")

    assert (rec.shift_start, rec.shift_end) == ("10:00", "14:00")
    assert rec.status_text == "On Time"


def test_no_punches_sanctioned_uses_single_multiplier():
    rec = run(employee("2025-01-06", [], sanctioned=True), "2025-01-06")

    assert rec.status.kind == StatusKind.ABSENT_LEAVE
    assert rec.status_text == "Absent: Sanctioned Leave"
    assert rec.attendance_deduction == 1
    assert rec.deduction_amount == pytest.approx(1000)


def test_no_record_at_all_is_unsanctioned_absence():
    emp = Employee(employee_id="e1", employment=Employment(shift_id="day", salary_amount=31000))
    rec = run(emp, "2025-01-06")

    assert rec.status_text == "Absent: Unsanctioned Leave"
    assert rec.deduction_amount == pytest.approx(2000)
    assert rec.deduction_remarks == "₹2000.00 deduction (2x daily salary) - Unsanctioned leave"


@pytest.mark.parametrize(
    "sanctioned, expected_status, expected_amount",
    [
        (False, "Absent: Missing Punch (Unsanctioned)", 2000),
        (True, "Absent: Missing Punch (Sanctioned)", 1000),
    ],
)
def test_missing_punch_follows_no_punch_policy(sanctioned, expected_status, expected_amount):
    rec = run(employee("2025-01-06", punches("8:00:00 am"), sanctioned=sanctioned), "2025-01-06")

    assert rec.status_text == expected_status
    assert rec.attendance_deduction == 1
    assert rec.deduction_amount == pytest.approx(expected_amount)
    assert rec.deduction_remarks.endswith("due to missing exit record")
    assert rec.first_in == "8:00:00 am"
    assert rec.last_out is None


def test_off_day():
    rec = run(employee("2025-01-11", punches("9:00", "10:00")), "2025-01-11")

    assert rec.status_text == "Off Day"
    assert rec.is_work_day is False
    assert rec.deduction_amount == 0
    assert rec.shift_start is None
    assert rec.working_hours == "1h 0m"


@pytest.mark.parametrize("day", ["2025-01-06", "2025-01-11"])
def test_holiday_wins_regardless_of_punches_or_schedule(day):
    holidays = [Holiday(date=day, name="Founders Day", type=HolidayType.HALF)]
    rec = run(employee(day, punches("11:30:00 am"), sanctioned=False), day, holidays=holidays)

    assert rec.status_text == "Holiday: Founders Day"
    assert rec.deduction_amount == 0
    assert rec.attendance_deduction == 0
    assert rec.deduction_remarks == "No deduction - half holiday: Founders Day"
    assert rec.to_dict()["holiday"] == {"name": "Founders Day", "type": "half"}


def test_recompute_keeps_sanction_and_notes_only():
    emp = employee(
        "2025-01-06",
        punches("8:55:00 am", "4:00:00 pm"),
        sanctioned=True,
        notes="Doctor appointment",
        status="On Time",
        deductionAmount=0,
    )
    rec = run(emp, "2025-01-06")

    assert rec.sanctioned is True
    assert rec.notes == "Doctor appointment"
    assert rec.status_text == "Late In (45 min)"
    assert rec.deduction_amount == 450


def test_idempotent_apart_from_timestamp():
    emp = employee("2025-01-06", punches("8:55:00 am", "3:30:00 pm"))
    processor = DayAttendanceProcessor()
    day = date(2025, 1, 6)

    first = processor.process(emp, DAY_SHIFT, RULES, {}, day, now=NOW).to_dict()
    second = processor.process(emp, DAY_SHIFT, RULES, {}, day, now=datetime(2025, 3, 1)).to_dict()

    assert first.pop("updatedAt") != second.pop("updatedAt")
    assert first == second
    assert first["status"] == "Late In (45 min) + Early Out (30 min)"
    assert first["deductionAmount"] == 750


def test_malformed_shift_time_becomes_error_processing():
    broken = ShiftSchedule(shift_id="day", name="Broken", default_times=ShiftTimes("eight", "16:00"), days=WEEKDAYS)
    rec = run(employee("2025-01-06", punches("8:00", "16:00")), "2025-01-06", schedule=broken)

    assert rec.status_text == "Error Processing"
    assert rec.status.kind == StatusKind.ERROR
    assert rec.deduction_amount == 0
    assert rec.deduction_remarks.startswith("Error calculating deductions:")


def test_night_shift_dutyoff_after_midnight_is_not_early():
    rec = run(employee("2025-01-06", punches("10:00:00 pm", "6:05:00 am"), shift_id="night"), "2025-01-06", schedule=NIGHT_SHIFT)

    assert rec.status_text == "On Time"
    assert rec.working_hours == "8h 5m"


def test_night_shift_leaving_before_morning_end_is_early():
    rec = run(employee("2025-01-06", punches("10:00:00 pm", "5:30:00 am"), shift_id="night"), "2025-01-06", schedule=NIGHT_SHIFT)

    assert rec.status_text == "Early Out (30 min)"
    assert rec.deduction_amount == 300


def test_daily_salary_uses_the_dates_own_month():
    assert daily_salary_for(29000, date(2024, 2, 10)) == 1000
    assert daily_salary_for(31000, date(2024, 3, 10)) == 1000


def test_process_one_date_requires_a_known_shift():
    emp = employee("2025-01-06", punches("8:00", "16:00"), shift_id="missing")

    with pytest.raises(ConfigurationError):
        process_one_date(emp, [DAY_SHIFT], RULES, {}, "2025-01-06")


def test_process_one_date_accepts_iso_text():
    rec = process_one_date(employee("2025-01-06", punches("8:00", "16:00")), [DAY_SHIFT, NIGHT_SHIFT], RULES, {}, "2025-01-06", now=NOW)

    assert rec.date == "2025-01-06"
    assert rec.status_text == "On Time"
    assert rec.updated_at == NOW.isoformat()
