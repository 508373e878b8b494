from __future__ import annotations

from flask import Flask, request

from ..auth.middleware import current_user, role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import MEETING_ORGANIZER_ROLES, MEETING_PREFIXES
from ..core.enums import Role
from ..container import Container
from .model import MeetingPage


def _page_response(page: MeetingPage):
    return ok(
        list(page.items),
        count=len(page.items),
        pagination={"current": page.page, "pages": page.pages, "total": page.total},
    )


def register(app: Flask, container: Container) -> None:
    for prefix, role in MEETING_PREFIXES.items():
        _register_invitee_routes(app, container, prefix, role)
        if role in MEETING_ORGANIZER_ROLES:
            _register_organizer_routes(app, container, prefix, role)


def _register_invitee_routes(app: Flask, container: Container, prefix: str, role: Role) -> None:
    service = container.meeting_service
    base = f"/api/{prefix}/meetings"

    @app.route(f"{base}/fetch-all", methods=["GET"], endpoint=f"{prefix}_meetings_fetch_all")
    @role_required(role)
    @api_errors("Error fetching meetings")
    def fetch_all():
        page = service.list_invited(
            current_user(),
            status=request.args.get("status"),
            date=request.args.get("date"),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return _page_response(page)

    @app.route(f"{base}/fetch-by-id/<meeting_id>", methods=["GET"], endpoint=f"{prefix}_meetings_fetch_by_id")
    @role_required(role)
    @api_errors("Error fetching meeting")
    def fetch_by_id(meeting_id: str):
        return ok(service.get_for_user(meeting_id, current_user()))

    @app.route(f"{base}/update-response/<meeting_id>", methods=["PUT"], endpoint=f"{prefix}_meetings_update_response")
    @role_required(role)
    @api_errors("Error updating meeting response")
    def update_response(meeting_id: str):
        data = json_body()
        meeting = service.respond(meeting_id, current_user(), status=data.get("status"))
        return ok(meeting, message=f"Meeting {data.get('status')} successfully")

    @app.route(f"{base}/fetch-stats", methods=["GET"], endpoint=f"{prefix}_meetings_fetch_stats")
    @role_required(role)
    @api_errors("Error fetching meeting statistics")
    def fetch_stats():
        return ok(service.stats(current_user()))


def _register_organizer_routes(app: Flask, container: Container, prefix: str, role: Role) -> None:
    service = container.meeting_service
    base = f"/api/{prefix}/meetings"

    @app.route(f"{base}/create", methods=["POST"], endpoint=f"{prefix}_meetings_create")
    @role_required(role)
    @api_errors("Error creating meeting")
    def create():
        data = json_body()
        meeting = service.create(
            current_user(),
            title=data.get("title"),
            schedule=data.get("schedule"),
            departments=data.get("departments"),
            platform=data.get("platform"),
            meeting_link=data.get("meeting_link"),
            description=data.get("description"),
            agenda=data.get("agenda"),
            location=data.get("location"),
            meeting_type=data.get("meeting_type"),
            priority=data.get("priority"),
            status=data.get("status"),
        )
        return ok(meeting, message="Meeting created successfully", status=201)

    @app.route(base, methods=["GET"], endpoint=f"{prefix}_meetings_organized")
    @role_required(role)
    @api_errors("Error fetching meetings")
    def organized():
        page = service.list_organized(
            current_user(),
            status=request.args.get("status"),
            date=request.args.get("date"),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return _page_response(page)

    @app.route(f"{base}/fetch-departments", methods=["GET"], endpoint=f"{prefix}_meetings_fetch_departments")
    @role_required(role)
    @api_errors("Error fetching departments")
    def fetch_departments():
        rows = container.department_service.catalog()
        return ok(rows, count=len(rows))

    @app.route(f"{base}/update/<meeting_id>", methods=["PUT"], endpoint=f"{prefix}_meetings_update")
    @role_required(role)
    @api_errors("Error updating meeting")
    def update(meeting_id: str):
        data = json_body()
        return ok(service.update(meeting_id, current_user(), data), message="Meeting updated successfully")

    @app.route(f"{base}/delete/<meeting_id>", methods=["DELETE"], endpoint=f"{prefix}_meetings_delete")
    @role_required(role)
    @api_errors("Error cancelling meeting")
    def delete(meeting_id: str):
        service.cancel(meeting_id, current_user())
        return ok(message="Meeting cancelled successfully")

    @app.route(f"{base}/<meeting_id>/attendance", methods=["PUT"], endpoint=f"{prefix}_meetings_record_attendance")
    @role_required(role)
    @api_errors("Error recording meeting attendance")
    def record_attendance(meeting_id: str):
        data = json_body()
        record = service.record_attendance(
            meeting_id,
            current_user(),
            participant_id=data.get("participant_id"),
            status=data.get("status"),
            join_time=data.get("join_time"),
            leave_time=data.get("leave_time"),
        )
        return ok(record, message="Attendance recorded successfully")

    @app.route(f"{base}/<meeting_id>/attendance", methods=["GET"], endpoint=f"{prefix}_meetings_attendance")
    @role_required(role)
    @api_errors("Error fetching meeting attendance")
    def attendance(meeting_id: str):
        records = service.attendance(meeting_id, current_user())
        return ok(records, count=len(records))
