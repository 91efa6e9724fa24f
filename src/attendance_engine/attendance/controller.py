from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.serialization import sanitize
from ..core.exceptions import ConfigurationError, ValidationError
from ..container import Container
from .request import ProcessRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int, **extra):
        body = {"message": message}
        body.update(extra)
        return jsonify(body), status

    @app.route("/api/attendance/process", methods=["POST"], endpoint="attendance_process")
    def attendance_process():
        """Month mode ``{branchId, monthYear}`` or range mode ``{branchId, startDate, endDate, employeeIds?}``.

        Optional ``punches``: ``{employeeId: {logs: [{dateTime, inOut, mode}]}}``.
        """

        payload = request.get_json(silent=True) or {}
        try:
            req = ProcessRequest.from_payload(payload)
            summary = container.attendance_service.process(req, raw_punches=payload.get("punches"))
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception as e:
            logger.exception("Error processing attendance")
            return _error("Error processing attendance", 500, error=str(e))

        return jsonify({"message": "Attendance processed successfully", "summary": summary.to_dict()}), 200

    @app.route("/api/attendance/process-date", methods=["POST"], endpoint="attendance_process_date")
    def attendance_process_date():
        payload = request.get_json(silent=True) or {}
        try:
            record = container.attendance_service.process_date(
                branch_id=payload.get("branchId"),
                employee_id=payload.get("employeeId"),
                date_str=payload.get("date"),
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except ConfigurationError as e:
            return _error(str(e), 422)
        except Exception as e:
            logger.exception("Error processing date attendance")
            return _error("Error processing date attendance", 500, error=str(e))

        return jsonify({"message": "Attendance processed successfully", "record": sanitize(record)}), 200
