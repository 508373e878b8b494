from __future__ import annotations

from flask import Flask, request

from ..auth.middleware import current_user, role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import HR_MANAGEMENT_ROLES
from ..container import Container

PREFIX = "/api/hr/holidays"
SELF_SERVICE_PREFIX = "/api/employee/holidays"


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route(f"{PREFIX}/create", methods=["POST"], endpoint="holidays_create")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error creating holiday")
    def holidays_create():
        data = json_body()
        holiday = service.create(
            title=data.get("title"),
            date=data.get("date"),
            departments=data.get("departments"),
            status=data.get("status"),
            description=data.get("description"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            display_time=data.get("display_time"),
            department_colors=data.get("department_colors"),
            background_color=data.get("background_color"),
            created_by=current_user().id,
        )
        return ok(holiday, message="Holiday created successfully", status=201)

    @app.route(f"{PREFIX}/fetch", methods=["GET"], endpoint="holidays_fetch")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching holidays")
    def holidays_fetch():
        holidays = service.list(
            department=request.args.get("department"),
            status=request.args.get("status"),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return ok(holidays, count=len(holidays))

    @app.route(f"{PREFIX}/range", methods=["GET"], endpoint="holidays_range")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching holidays")
    def holidays_range():
        holidays = service.in_range(
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            department=request.args.get("department"),
        )
        return ok(holidays, count=len(holidays))

    @app.route(f"{PREFIX}/check/<date>", methods=["GET"], endpoint="holidays_check")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error checking holiday")
    def holidays_check(date: str):
        holidays = service.check(date, department=request.args.get("department"))
        return ok(holidays, exists=bool(holidays))

    @app.route(f"{PREFIX}/department/<department>", methods=["GET"], endpoint="holidays_by_department")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching department holidays")
    def holidays_by_department(department: str):
        holidays = service.for_department(department, year=request.args.get("year"))
        return ok(holidays, count=len(holidays))

    @app.route(f"{PREFIX}/<holiday_id>", methods=["GET"], endpoint="holidays_get")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching holiday")
    def holidays_get(holiday_id: str):
        return ok(service.get(holiday_id))

    @app.route(f"{PREFIX}/<holiday_id>", methods=["PUT"], endpoint="holidays_update")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating holiday")
    def holidays_update(holiday_id: str):
        data = json_body()
        return ok(service.update(holiday_id, data), message="Holiday updated successfully")

    @app.route(f"{PREFIX}/<holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error deleting holiday")
    def holidays_delete(holiday_id: str):
        service.delete(holiday_id)
        return ok(message="Holiday deleted successfully")

    # Self-service: any employee, scoped to their own department.
    @app.route(f"{SELF_SERVICE_PREFIX}/check/<date>", methods=["GET"], endpoint="my_holidays_check")
    @role_required()
    @api_errors("Error checking holiday")
    def my_holidays_check(date: str):
        holidays = service.check(date, department=current_user().role.value)
        return ok(holidays, exists=bool(holidays))

    @app.route(f"{SELF_SERVICE_PREFIX}/range", methods=["GET"], endpoint="my_holidays_range")
    @role_required()
    @api_errors("Error fetching holidays")
    def my_holidays_range():
        holidays = service.in_range(
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            department=current_user().role.value,
        )
        return ok(holidays, count=len(holidays))

    @app.route(f"{SELF_SERVICE_PREFIX}/today", methods=["GET"], endpoint="my_holidays_today")
    @role_required()
    @api_errors("Error fetching today's holiday")
    def my_holidays_today():
        holidays = service.today(department=current_user().role.value)
        return ok(holidays, is_holiday=any(h.is_day_off for h in holidays))
