from __future__ import annotations

from datetime import timedelta

from src.hr_operations.hr_operations.auth.middleware import TOKEN_COOKIE
from src.hr_operations.hr_operations.auth.tokens import issue_token
from src.hr_operations.hr_operations.core.enums import EmployeeStatus, Role

from conftest import JWT_SECRET


def test_root_and_health(client):
    root = client.get("/").get_json()
    assert root["success"] is True
    assert root["health"] == "/api/health"

    health = client.get("/api/health").get_json()
    assert health["database"] == "disconnected"
    assert health["environment"] == "testing"


def test_unknown_route_envelope(client):
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.get_json() == {
        "success": False,
        "message": "Route not found",
        "requested_url": "/api/nowhere",
        "method": "GET",
    }


def test_security_headers(client):
    resp = client.get("/")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_missing_token(client):
    resp = client.get("/api/hr/employees")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Access denied. No token provided."


def test_expired_token(client, add_employee):
    hr = add_employee("Ravi Kumar", Role.HR)
    token = issue_token(secret=JWT_SECRET, employee_id=hr.id, role=hr.role, expires_in=timedelta(seconds=-30))

    resp = client.get("/api/hr/employees", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token expired"


def test_token_signed_with_other_secret(client, add_employee):
    hr = add_employee("Ravi Kumar", Role.HR)
    token = issue_token(secret="someone-else", employee_id=hr.id, role=hr.role)
    resp = client.get("/api/hr/employees", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_inactive_account_is_blocked(client, add_employee, auth_headers):
    hr = add_employee("Ravi Kumar", Role.HR, status=EmployeeStatus.INACTIVE)

    resp = client.get("/api/hr/employees", headers=auth_headers(hr))

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Account is inactive. Please contact HR."


def test_token_read_from_cookie(client, add_employee):
    hr = add_employee("Ravi Kumar", Role.HR)
    client.set_cookie(TOKEN_COOKIE, issue_token(secret=JWT_SECRET, employee_id=hr.id, role=hr.role))

    resp = client.get("/api/hr/employees")

    assert resp.status_code == 200
    assert resp.get_json()["count"] == 1
