"""
Student response mapping utilities.

Transforms service dictionaries into Pydantic response models.

Dependencies: backend.models.student
System role: Student response transformation
"""

from typing import Any

from fastapi import Response

from backend.models.student import AttendanceResponse, StudentResponse


def map_student_to_response(student_data: dict[str, Any]) -> StudentResponse:
    """
    Transform student data dictionary into StudentResponse.

    Args:
        student_data: Dictionary containing student fields

    Returns:
        StudentResponse: Pydantic model for API response
    """
    return StudentResponse(**student_data)


def map_students_to_response(students_data: list[dict[str, Any]]) -> list[StudentResponse]:
    return [map_student_to_response(s) for s in students_data]


def map_attendances_to_response(attendances: list[dict[str, Any]]) -> list[AttendanceResponse]:
    return [AttendanceResponse(**a) for a in attendances]


def csv_download(content: str, filename: str) -> Response:
    """Wrap CSV text as a file download."""
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
