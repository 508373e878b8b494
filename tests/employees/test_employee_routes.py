from __future__ import annotations

from src.hr_operations.hr_operations.core.enums import Role

from conftest import new_id

PREFIX = "/api/hr/employees"


def test_create_get_update_and_deactivate(client, add_employee, auth_headers):
    headers = auth_headers(add_employee("Ravi Kumar", Role.HR))

    created = client.post(
        f"{PREFIX}/create",
        json={"name": "Meera Iyer", "email": "Meera@Example.com", "role": "telecaller", "emp_code": "TC-01"},
        headers=headers,
    )
    assert created.status_code == 201
    employee = created.get_json()["data"]
    assert employee["email"] == "meera@example.com"
    assert employee["status"] == "active"

    fetched = client.get(f"{PREFIX}/{employee['id']}", headers=headers).get_json()
    assert fetched["data"]["emp_code"] == "TC-01"

    updated = client.put(f"{PREFIX}/{employee['id']}", json={"designation": "Senior caller"}, headers=headers)
    assert updated.get_json()["data"]["designation"] == "Senior caller"

    status = client.patch(f"{PREFIX}/{employee['id']}/status", json={"status": "inactive"}, headers=headers)
    assert status.status_code == 200

    active = client.get(f"{PREFIX}?role=telecaller", headers=headers).get_json()
    everyone = client.get(f"{PREFIX}?role=telecaller&status=all", headers=headers).get_json()
    assert (active["count"], everyone["count"]) == (0, 1)


def test_duplicate_email_and_bad_role(client, add_employee, auth_headers):
    hr = add_employee("Ravi Kumar", Role.HR)
    headers = auth_headers(hr)

    dup = client.post(
        f"{PREFIX}/create", json={"name": "Other Ravi", "email": hr.email, "role": "hr"}, headers=headers
    )
    assert dup.status_code == 400
    assert dup.get_json()["message"] == "An employee with this email already exists"

    bad = client.post(
        f"{PREFIX}/create", json={"name": "X", "email": "x@example.com", "role": "intern"}, headers=headers
    )
    assert bad.status_code == 400


def test_lookup_errors(client, add_employee, auth_headers):
    headers = auth_headers(add_employee("Asha Menon", Role.CEO))

    assert client.get(f"{PREFIX}/{new_id()}", headers=headers).status_code == 404
    assert client.get(f"{PREFIX}/not-an-id", headers=headers).get_json()["message"] == "Invalid employee ID"


def test_sales_cannot_manage_employees(client, add_employee, auth_headers):
    headers = auth_headers(add_employee("Priya Nair", Role.SALES_EMPLOYEE))
    assert client.get(PREFIX, headers=headers).status_code == 403
