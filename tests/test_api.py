from fastapi.testclient import TestClient

from centerdesk import create_app
from centerdesk.services.record_store import DocumentStore


def add_class(client, name="Level 1"):
    response = client.post("/api/v1/classes", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


def add_student(client, class_id, **overrides):
    payload = {"name": "Sara Ali", "phone": "0501234567", "classId": class_id}
    payload.update(overrides)
    response = client.post("/api/v1/students", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def test_student_crud_keeps_class_roster(client):
    class_id = add_class(client)

    response = client.post(
        "/api/v1/students",
        json={"name": "Sara Ali", "phone": "0501234567", "classId": class_id}
    )
    body = response.json()
    assert body["notice"]["type"] == "success"
    assert body["notice"]["message"] == "Added successfully!"
    assert body["warnings"] == []
    assert "X-Request-ID" in response.headers
    student_id = body["id"]

    assert client.get(f"/api/v1/classes/{class_id}").json()["students"] == [student_id]
    assert client.get("/api/v1/students", params={"search": "sara"}).json()[0]["classId"] == class_id
    assert client.get("/api/v1/students", params={"search": "nobody"}).json() == []

    response = client.patch(f"/api/v1/students/{student_id}", json={"classId": None})
    assert response.status_code == 200
    assert client.get(f"/api/v1/classes/{class_id}").json()["students"] == []

    assert client.delete(f"/api/v1/students/{student_id}").status_code == 200
    assert client.get(f"/api/v1/students/{student_id}").status_code == 404


def test_invalid_form_returns_field_errors(client):
    response = client.post("/api/v1/students", json={"name": "", "phone": "123"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["details"]["name"] == "Name is required."
    assert body["details"]["phone"] == "Invalid phone number (at least 10 digits)."
    assert body["details"]["classId"] == "A class must be selected."
    assert body["notice"]["type"] == "error"


def test_errors_are_translated(client):
    response = client.post("/api/v1/classes", json={}, headers={"Accept-Language": "ar"})

    assert response.status_code == 422
    assert response.json()["details"]["name"] == "اسم الفصل مطلوب."


def test_supervisor_is_limited_to_attendance(client):
    headers = {"X-User-Role": "supervisor"}

    response = client.get("/api/v1/students", headers=headers)
    assert response.status_code == 403
    assert response.json()["error_code"] == "PERMISSION_DENIED"

    assert client.get("/api/v1/attendance/classes", headers=headers).status_code == 200
    assert client.get("/api/v1/navigation", headers=headers).json()["state"]["section"] == "attendance"


def test_uninitialized_store_answers_503():
    with TestClient(create_app(DocumentStore())) as client:
        response = client.get("/api/v1/courses")

    assert response.status_code == 503
    body = response.json()
    assert body["error_code"] == "STORE_UNAVAILABLE"
    assert body["notice"]["message"] == "Database is not initialized."


def test_class_assignment_and_reconcile(client):
    c1 = add_class(client, "Level 1")
    c2 = add_class(client, "Level 2")
    student_id = add_student(client, c1)

    response = client.put(f"/api/v1/classes/{c2}/students", json={"studentIds": [student_id]})
    assert response.status_code == 200
    assert client.get(f"/api/v1/classes/{c1}").json()["students"] == []
    assert client.get(f"/api/v1/students/{student_id}").json()["classId"] == c2

    response = client.post("/api/v1/classes/reconcile")
    assert response.status_code == 200
    assert response.json()["repairedClassIds"] == []

    assert client.delete(f"/api/v1/classes/{c2}").status_code == 200
    assert client.get(f"/api/v1/students/{student_id}").json()["classId"] is None


def test_attendance_session(client):
    class_id = add_class(client)
    student_id = add_student(client, class_id)
    instructor = client.post("/api/v1/instructors", json={"name": "Omar", "phone": "0551234567"})
    instructor_id = instructor.json()["id"]
    client.put(f"/api/v1/classes/{class_id}/instructors", json={"instructorIds": [instructor_id]})
    session = {"classId": class_id, "instructorId": instructor_id, "date": "2024-03-05"}

    response = client.post("/api/v1/attendance/sessions", json={**session, "statuses": {}})
    assert response.status_code == 422

    for status in ("present", "late"):
        response = client.post(
            "/api/v1/attendance/sessions",
            json={**session, "statuses": {student_id: status}},
            headers={"X-User-Role": "supervisor"}
        )
        assert response.status_code == 200
        assert response.json()["saved"] == [student_id]

    statuses = client.get(f"/api/v1/attendance/classes/{class_id}/sessions/2024-03-05").json()
    assert statuses["statuses"] == {student_id: "late"}

    roster = client.get(f"/api/v1/attendance/classes/{class_id}/roster").json()
    assert [student["id"] for student in roster["students"]] == [student_id]
    assert [instructor["id"] for instructor in roster["instructors"]] == [instructor_id]


def test_summary_and_csv_export(client):
    class_id = add_class(client)
    student_id = add_student(client, class_id, name="Sara, Ali", paid=True)
    client.post("/api/v1/payments", json={"studentId": student_id, "amount": 250, "date": "2024-01-10"})
    client.post("/api/v1/payments", json={"studentId": student_id, "amount": 100, "date": "2024-01-11"})
    client.post("/api/v1/expenses", json={"description": "Rent", "amount": 150, "date": "2024-01-12"})

    summary = client.get("/api/v1/reports/summary").json()
    assert summary["totalRevenue"] == 350
    assert summary["totalExpenses"] == 150
    assert summary["netIncome"] == 200
    assert summary["expensesByCategory"] == {"general": 150}

    response = client.post("/api/v1/reports/students-by-classes.csv", json={"classIds": [class_id]})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == "attachment; filename=student_data_by_class.csv"
    assert response.text.splitlines() == [
        "Student Name,Phone Number,Email,Payment Status,Class",
        '"Sara, Ali",0501234567,,Paid,Level 1',
    ]

    response = client.post("/api/v1/reports/students-by-classes.csv", json={"classIds": []})
    assert response.status_code == 422
    assert response.json()["message"] == "Select at least one class to export student data."


def test_navigation_rejects_hidden_section(client):
    response = client.post(
        "/api/v1/navigation/section",
        json={"state": {"role": "supervisor", "section": "attendance"}, "section": "reports"}
    )
    assert response.status_code == 403

    response = client.post("/api/v1/navigation/role", json={"role": "supervisor"})
    body = response.json()
    assert body["state"]["section"] == "attendance"
    assert [item["section"] for item in body["items"]] == ["attendance"]


def test_edit_cannot_null_out_required_fields(client):
    class_id = add_class(client)
    student_id = add_student(client, class_id)

    response = client.patch(f"/api/v1/students/{student_id}", json={"paid": None})
    assert response.status_code == 422
    assert response.json()["details"] == {"paid": "Value cannot be empty."}

    response = client.get("/api/v1/students")
    assert response.status_code == 200
    assert response.json()[0]["paid"] is False


def test_non_finite_amount_is_rejected(client):
    class_id = add_class(client)
    student_id = add_student(client, class_id)

    response = client.post("/api/v1/payments", json={"studentId": student_id, "amount": "inf", "date": "2024-01-10"})
    assert response.status_code == 422
    assert client.get("/api/v1/payments").json() == []

    summary = client.get("/api/v1/reports/summary").json()
    assert summary["totalRevenue"] == 0
    assert summary["netIncome"] == summary["totalRevenue"] - summary["totalExpenses"]


def test_permission_denial_is_logged_by_the_app_logger(client, caplog):
    with caplog.at_level("WARNING", logger="centerdesk"):
        client.get("/api/v1/payments", headers={"X-User-Role": "supervisor"})

    denials = [record for record in caplog.records if "Permission denied" in record.getMessage()]
    assert [record.name for record in denials] == ["centerdesk"]
