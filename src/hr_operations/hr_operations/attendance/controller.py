from __future__ import annotations

from flask import Flask, request

from ..auth.middleware import current_user, role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import HR_MANAGEMENT_ROLES
from ..container import Container

PREFIX = "/api/hr/attendance"


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route(f"{PREFIX}/mark", methods=["POST"], endpoint="attendance_mark")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error marking attendance")
    def attendance_mark():
        data = json_body()
        record = service.mark(
            employee_id=data.get("employee_id"),
            date=data.get("date"),
            status=data.get("status"),
            departments=data.get("departments") or data.get("department"),
            check_in=data.get("check_in"),
            check_out=data.get("check_out"),
            notes=data.get("notes"),
        )
        return ok(record, message="Attendance marked successfully", status=201)

    @app.route(f"{PREFIX}/<attendance_id>/check-out", methods=["PUT"], endpoint="attendance_check_out")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error recording check-out")
    def attendance_check_out(attendance_id: str):
        data = json_body()
        record = service.check_out(attendance_id, check_out=data.get("check_out"))
        return ok(record, message="Check-out recorded successfully")

    @app.route(f"{PREFIX}/update-status/<attendance_id>", methods=["PUT"], endpoint="attendance_update_status")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating attendance status")
    def attendance_update_status(attendance_id: str):
        data = json_body()
        record = service.update_status(
            attendance_id,
            status=data.get("status"),
            remarks=data.get("remarks"),
            description=data.get("description"),
            approved_by=current_user().id,
        )
        return ok(record, message="Attendance status updated successfully")

    @app.route(f"{PREFIX}/<attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating attendance")
    def attendance_update(attendance_id: str):
        data = json_body()
        return ok(service.update(attendance_id, data), message="Attendance updated successfully")

    @app.route(f"{PREFIX}/employee/<employee_id>", methods=["GET"], endpoint="attendance_employee_history")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching attendance")
    def attendance_employee_history(employee_id: str):
        records = service.history(employee_id, month=request.args.get("month"), year=request.args.get("year"))
        return ok(records, count=len(records))

    @app.route(f"{PREFIX}/department/<department>", methods=["GET"], endpoint="attendance_department")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching department attendance")
    def attendance_department(department: str):
        records = service.for_department(department, date=request.args.get("date"))
        return ok(records, count=len(records))

    @app.route(f"{PREFIX}/summary/<employee_id>", methods=["GET"], endpoint="attendance_summary")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching attendance summary")
    def attendance_summary(employee_id: str):
        summary = service.summary(employee_id, month=request.args.get("month"), year=request.args.get("year"))
        return ok(summary)

    @app.route(f"{PREFIX}/daily", methods=["GET"], endpoint="attendance_daily")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching daily attendance")
    def attendance_daily():
        return ok(service.daily(date=request.args.get("date")))
