from __future__ import annotations

from flask import Flask, request

from ..auth.middleware import role_required
from ..common.responses import api_errors, json_body, ok
from ..core.constants import HR_MANAGEMENT_ROLES
from ..container import Container

PREFIX = "/api/hr/employees"


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route(PREFIX, methods=["GET"], endpoint="employees_list")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching employees")
    def employees_list():
        employees = service.list_employees(role=request.args.get("role"), status=request.args.get("status"))
        return ok(employees, count=len(employees))

    @app.route(f"{PREFIX}/<employee_id>", methods=["GET"], endpoint="employees_get")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error fetching employee")
    def employees_get(employee_id: str):
        return ok(service.get_employee(employee_id))

    @app.route(f"{PREFIX}/create", methods=["POST"], endpoint="employees_create")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error creating employee")
    def employees_create():
        data = json_body()
        employee = service.create_employee(
            name=data.get("name"),
            email=data.get("email"),
            role=data.get("role"),
            emp_code=data.get("emp_code"),
            phone=data.get("phone"),
            designation=data.get("designation"),
        )
        return ok(employee, message="Employee created successfully", status=201)

    @app.route(f"{PREFIX}/<employee_id>", methods=["PUT"], endpoint="employees_update")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating employee")
    def employees_update(employee_id: str):
        data = json_body()
        return ok(service.update_employee(employee_id, data), message="Employee updated successfully")

    @app.route(f"{PREFIX}/<employee_id>/status", methods=["PATCH"], endpoint="employees_set_status")
    @role_required(*HR_MANAGEMENT_ROLES)
    @api_errors("Error updating employee status")
    def employees_set_status(employee_id: str):
        data = json_body()
        return ok(service.set_status(employee_id, data.get("status")), message="Employee status updated")
