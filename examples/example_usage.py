"""Example: run the engine through the service layer (without Flask).

Seed the MySQL database first with ``python scripts/seed_data.py``.
"""

import importlib

from config import get_settings_module

from attendance_engine.attendance.request import ProcessRequest
from attendance_engine.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(config={"DB_CONFIG": settings.DB_CONFIG, "PUNCH_TIMEZONE": settings.PUNCH_TIMEZONE})
    request = ProcessRequest.from_payload({"branchId": "main-campus", "monthYear": "08-2025"})
    print(container.attendance_service.process(request).to_dict())
    print(container.attendance_service.process_date(branch_id="main-campus", employee_id="101", date_str="2025-08-14").to_dict())


if __name__ == "__main__":
    main()
