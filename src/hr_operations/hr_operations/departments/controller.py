from __future__ import annotations

from flask import Flask

from ..auth.middleware import current_user, role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import HR_MANAGEMENT_ROLES
from ..container import Container

PREFIX = "/api/hr/departments"


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route(PREFIX, methods=["GET"], endpoint="departments_list")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching departments")
    def departments_list():
        departments = service.list_active()
        return ok(departments, count=len(departments))

    @app.route(f"{PREFIX}/catalog", methods=["GET"], endpoint="departments_catalog")
    @role_required()
    @api_errors("Error fetching department catalog")
    def departments_catalog():
        rows = service.catalog()
        return ok(rows, count=len(rows))

    @app.route(f"{PREFIX}/create", methods=["POST"], endpoint="departments_create")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error creating department")
    def departments_create():
        data = json_body()
        department = service.create(
            name=data.get("name"),
            description=data.get("description"),
            created_by=current_user().id,
        )
        return ok(department, message="Department created successfully", status=201)

    @app.route(f"{PREFIX}/<department_id>", methods=["PUT"], endpoint="departments_update")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating department")
    def departments_update(department_id: str):
        data = json_body()
        department = service.update(department_id, data)
        return ok(department, message="Department updated successfully")

    @app.route(f"{PREFIX}/<department_id>", methods=["DELETE"], endpoint="departments_delete")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error deleting department")
    def departments_delete(department_id: str):
        service.deactivate(department_id)
        return ok(message="Department deleted successfully")
