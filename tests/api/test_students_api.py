"""
Tests for the student endpoints.

System role: Student HTTP API verification
"""

import uuid

from api_factories import make_attendance, make_student
from backend.core.exceptions import ConflictError, StudentNotFoundError, ValidationError


class TestListAndCreate:
    def test_list_students_passes_filters(self, client, services) -> None:
        # Arrange
        services["student"].list_students.return_value = [make_student()]

        # Act
        response = client.get("/api/v1/students", params={"search": "joão", "belt": "Azul", "status": "active"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data[0]["name"] == "João Silva"
        assert data[0]["belt_history"][0]["from"] == "Branca"
        kwargs = services["student"].list_students.call_args.kwargs
        assert kwargs["search"] == "joão"
        assert kwargs["belt"].value == "Azul"

    def test_invalid_belt_filter_rejected(self, client) -> None:
        response = client.get("/api/v1/students", params={"belt": "Verde"})
        assert response.status_code == 422

    def test_create_student(self, client, services) -> None:
        services["student"].add_student.return_value = make_student(name="Ana")

        response = client.post("/api/v1/students", json={"name": "Ana", "email": "ana@academia.com"})

        assert response.status_code == 201
        assert response.json()["name"] == "Ana"
        sent = services["student"].add_student.call_args.args[0]
        assert sent["belt"].value == "Branca"
        assert sent["monthly_fee"] == 0.0

    def test_create_validation_error_is_400(self, client, services) -> None:
        services["student"].add_student.side_effect = ValidationError("Name and email are required")

        response = client.post("/api/v1/students", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Name and email are required"

    def test_duplicate_email_is_409(self, client, services) -> None:
        services["student"].add_student.side_effect = ConflictError("Email already registered")

        response = client.post("/api/v1/students", json={"name": "Ana", "email": "ana@academia.com"})

        assert response.status_code == 409

    def test_negative_fee_rejected_by_schema(self, client) -> None:
        response = client.post("/api/v1/students", json={"name": "Ana", "email": "a@b.com", "monthly_fee": -1})
        assert response.status_code == 422


class TestSingleStudent:
    def test_get_missing_student_is_404(self, client, services) -> None:
        student_id = uuid.uuid4()
        services["student"].get_student.side_effect = StudentNotFoundError(student_id)

        response = client.get(f"/api/v1/students/{student_id}")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"].lower()

    def test_update_sends_only_given_fields(self, client, services) -> None:
        student_id = uuid.uuid4()
        services["student"].update_student.return_value = make_student(id=student_id, belt="Roxa")

        response = client.put(
            f"/api/v1/students/{student_id}",
            json={"belt": "Roxa", "graduation_notes": "Exame"},
        )

        assert response.status_code == 200
        args = services["student"].update_student.call_args.args
        assert args[0] == student_id
        assert set(args[1]) == {"belt", "graduation_notes"}

    def test_empty_update_is_400(self, client, services) -> None:
        response = client.put(f"/api/v1/students/{uuid.uuid4()}", json={"graduation_notes": "x"})

        assert response.status_code == 400
        services["student"].update_student.assert_not_called()

    def test_delete(self, client, services) -> None:
        services["student"].delete_student.return_value = True

        response = client.delete(f"/api/v1/students/{uuid.uuid4()}")

        assert response.status_code == 204


class TestAttendance:
    def test_mark_attendance(self, client, services) -> None:
        student_id = uuid.uuid4()
        services["student"].mark_attendance.return_value = make_attendance(student_id=student_id, notes="Drills")

        response = client.post(f"/api/v1/students/{student_id}/attendance", json={"notes": "Drills"})

        assert response.status_code == 201
        assert response.json()["notes"] == "Drills"
        services["student"].mark_attendance.assert_called_once_with(student_id, notes="Drills")

    def test_mark_attendance_without_body(self, client, services) -> None:
        student_id = uuid.uuid4()
        services["student"].mark_attendance.return_value = make_attendance(student_id=student_id)

        response = client.post(f"/api/v1/students/{student_id}/attendance")

        assert response.status_code == 201
        services["student"].mark_attendance.assert_called_once_with(student_id, notes="")

    def test_outside_window_is_400(self, client, services) -> None:
        services["student"].mark_attendance.side_effect = ValidationError(
            "Attendance can only be registered between 6h and 23h"
        )

        response = client.post(f"/api/v1/students/{uuid.uuid4()}/attendance", json={})

        assert response.status_code == 400

    def test_list_attendance_rejects_bad_limit(self, client) -> None:
        response = client.get(f"/api/v1/students/{uuid.uuid4()}/attendance", params={"limit": 0})
        assert response.status_code == 400


class TestExport:
    def test_export_returns_csv_download(self, client, services) -> None:
        services["student"].export_csv.return_value = ('"Nome","Email"\n', "alunos_2025-03-15.csv")

        response = client.get("/api/v1/students/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="alunos_2025-03-15.csv"' in response.headers["content-disposition"]
        assert response.text == '"Nome","Email"\n'


class TestAccessControl:
    def test_students_route_forbidden_for_student_role(self, student_client) -> None:
        response = student_client.get("/api/v1/students")

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_missing_token_is_401(self, anonymous_client) -> None:
        response = anonymous_client.get("/api/v1/students")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
