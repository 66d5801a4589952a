"""
Student request validation utilities.

Request-shape rules not covered by Pydantic models. Field-level rules
(email, phone, CPF, uniqueness) live in StudentService.

Dependencies: backend.models.student
System role: Student request validation
"""

from backend.core.exceptions import ValidationError
from backend.models.student import UpdateStudentRequest


def validate_student_update(request: UpdateStudentRequest) -> None:
    """
    Reject updates that carry no field at all.

    Raises:
        ValidationError: If no field was provided
    """
    if not request.model_fields_set - {"graduation_notes"}:
        raise ValidationError("At least one field must be provided for update")


def validate_attendance_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise ValidationError("Limit must be a positive number", field="limit")
