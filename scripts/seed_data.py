from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from attendance_engine.database.bootstrap import apply_schema
from attendance_engine.database.connection import DBConfig, DatabaseConnection
from attendance_engine.database.mysql_base import db_cursor, dump_json_column

DEMO_BRANCH = "main-campus"

ORGANIZATION = {
    "shiftSchedules": [
        {
            "id": "teaching",
            "name": "Teaching Staff",
            "defaultTimes": {"start": "08:00", "end": "14:30"},
            "flexibleTime": {"enabled": True, "graceMinutes": 10},
            "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
            "dayOverrides": {"Saturday": {"start": "08:00", "end": "12:30"}},
            "dateOverrides": {},
        },
        {
            "id": "night-guard",
            "name": "Night Security",
            "defaultTimes": {"start": "22:00", "end": "06:00"},
            "flexibleTime": {"enabled": False, "graceMinutes": 0},
            "days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
        },
    ]
}

RULES = {
    "lateDeductions": {
        "enabled": True,
        "deductionType": "percentage",
        "deductPerMinute": 0.5,
        "fixedAmountPerMinute": 0,
        "maxDeductionTime": 90,
        "halfDayThreshold": 120,
        "absentThreshold": 240,
    },
    "leaveRules": {"unsanctionedMultiplier": 2},
}

HOLIDAYS = [
    {"date": "2025-01-26", "name": "Republic Day", "type": "full"},
    {"date": "2025-08-15", "name": "Independence Day", "type": "full"},
    {"date": "2025-10-02", "name": "Gandhi Jayanti", "type": "full"},
]

EMPLOYEES = {
    "101": {"name": "Demo Teacher", "employment": {"shiftId": "teaching", "salaryAmount": 31000}},
    "201": {"name": "Demo Guard", "employment": {"shiftId": "night-guard", "salaryAmount": 18000}},
}


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))
    apply_schema(conn)

    with db_cursor(conn) as (_, cur):
        for schedule in ORGANIZATION["shiftSchedules"]:
            definition = {k: v for k, v in schedule.items() if k not in ("id", "name")}
            cur.execute(
                """
                INSERT INTO shift_schedules(shift_id, name, definition) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), definition=VALUES(definition)
                """,
                (schedule["id"], schedule["name"], dump_json_column(definition)),
            )

        cur.execute(
            """
            INSERT INTO attendance_rules(branch_id, rules) VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE rules=VALUES(rules)
            """,
            (DEMO_BRANCH, dump_json_column(RULES)),
        )

        for holiday in HOLIDAYS:
            cur.execute(
                """
                INSERT INTO holidays(holiday_date, name, holiday_type) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), holiday_type=VALUES(holiday_type)
                """,
                (holiday["date"], holiday["name"], holiday["type"]),
            )

        for employee_id, employee in EMPLOYEES.items():
            cur.execute(
                """
                INSERT INTO employees(branch_id, employee_id, full_name, shift_id, salary_amount)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE full_name=VALUES(full_name), shift_id=VALUES(shift_id),
                    salary_amount=VALUES(salary_amount)
                """,
                (
                    DEMO_BRANCH,
                    employee_id,
                    employee["name"],
                    employee["employment"]["shiftId"],
                    employee["employment"]["salaryAmount"],
                ),
            )

    print(f"OK: Seeded demo data -> {conn.config.database} (branch={DEMO_BRANCH})")


if __name__ == "__main__":
    main()
