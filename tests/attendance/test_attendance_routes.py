from __future__ import annotations

from src.hr_operations.hr_operations.core.enums import Role


def test_mark_and_summary_over_http(client, add_employee, auth_headers):
    hr = add_employee("Ravi Kumar", Role.HR)
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    headers = auth_headers(hr)

    resp = client.post(
        "/api/hr/attendance/mark",
        json={"employee_id": employee.id, "date": "2025-09-01", "check_in": "09:00", "check_out": "17:00"},
        headers=headers,
    )
    assert resp.status_code == 201
    assert resp.get_json()["data"]["total_hours"] == 8.0

    again = client.post(
        "/api/hr/attendance/mark",
        json={"employee_id": employee.id, "date": "2025-09-01"},
        headers=headers,
    )
    assert again.status_code == 400
    assert again.get_json()["message"] == "Attendance already marked for this date"

    summary = client.get(f"/api/hr/attendance/summary/{employee.id}?month=9&year=2025", headers=headers)
    assert summary.status_code == 200
    assert summary.get_json()["data"]["present"] == 1


def test_update_status_records_approver(client, container, add_employee, auth_headers):
    hr = add_employee("Ravi Kumar", Role.HR)
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    record = container.attendance_service.mark(employee_id=employee.id, date="2025-09-01")

    resp = client.put(
        f"/api/hr/attendance/update-status/{record.id}",
        json={"status": "Leave", "remarks": "Approved leave"},
        headers=auth_headers(hr),
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["approved_by"] == hr.id


def test_daily_dashboard_endpoint(client, add_employee, auth_headers):
    ceo = add_employee("Asha Menon", Role.CEO)
    add_employee("Priya Nair", Role.SALES_EMPLOYEE)

    body = client.get("/api/hr/attendance/daily?date=2025-09-10", headers=auth_headers(ceo)).get_json()

    assert body["data"]["summary"]["total_employees"] == 2
    assert body["data"]["summary"]["absent"] == 2
    assert body["data"]["is_holiday"] is False
