"""
Student API endpoints.

Routes:
- GET /students - List students (search, belt, status filters)
- POST /students - Enroll student
- GET /students/export - Download filtered roster as CSV
- GET /students/{id} - Get single student
- PUT /students/{id} - Update student
- DELETE /students/{id} - Delete student
- POST /students/{id}/attendance - Register check-in
- GET /students/{id}/attendance - List check-ins

Dependencies: backend.application.services, backend.models
System role: Student management HTTP API (admin only)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from backend.api.deps import get_student_service, require_admin
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import StudentService
from backend.core.enums import BeltLevel, StudentStatus
from backend.models.student import (
    AttendanceResponse,
    CreateStudentRequest,
    MarkAttendanceRequest,
    StudentResponse,
    UpdateStudentRequest,
)

from .student_responses import (
    csv_download,
    map_attendances_to_response,
    map_student_to_response,
    map_students_to_response,
)
from .student_validators import validate_attendance_limit, validate_student_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[StudentResponse])
@handle_domain_errors
async def list_students(
    search: str | None = None,
    belt: BeltLevel | None = None,
    status: StudentStatus | None = None,
    student_service: StudentService = Depends(get_student_service),
) -> list[StudentResponse]:
    """
    List students ordered by name.

    Args:
        search: Substring of name or email
        belt: Belt filter
        status: Enrollment status filter
        student_service: Injected StudentService

    Returns:
        list[StudentResponse]: Matching students
    """
    students = await student_service.list_students(search=search, belt=belt, status=status)

    logger.info(
        "Students listed",
        extra={"count": len(students), "has_search": bool(search)},
    )

    return map_students_to_response(students)


@router.post("", response_model=StudentResponse, status_code=201)
@handle_domain_errors
async def create_student(
    request: CreateStudentRequest,
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """
    Enroll a student.

    Raises:
        HTTPException(400): Missing name/email or invalid contact data
        HTTPException(409): Email already registered
    """
    student = await student_service.add_student(request.model_dump())
    return map_student_to_response(student)


@router.get("/export")
@handle_domain_errors
async def export_students(
    search: str | None = None,
    belt: BeltLevel | None = None,
    status: StudentStatus | None = None,
    student_service: StudentService = Depends(get_student_service),
) -> Response:
    """
    Download the filtered roster as CSV (alunos_YYYY-MM-DD.csv).
    """
    content, filename = await student_service.export_csv(search=search, belt=belt, status=status)
    return csv_download(content, filename)


@router.get("/{student_id}", response_model=StudentResponse)
@handle_domain_errors
async def get_student(
    student_id: UUID,
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """
    Get single student by ID.

    Raises:
        HTTPException(404): Student not found
    """
    student = await student_service.get_student(student_id)
    return map_student_to_response(student)


@router.put("/{student_id}", response_model=StudentResponse)
@handle_domain_errors
async def update_student(
    student_id: UUID,
    request: UpdateStudentRequest,
    student_service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """
    Update student by ID.

    Blank fields are ignored. A belt change is appended to the belt history
    with `graduation_notes` (default "Graduação").

    Raises:
        HTTPException(404): Student not found
        HTTPException(400): Invalid contact data or empty update
        HTTPException(409): Email belongs to another student
    """
    validate_student_update(request)

    logger.info(
        "Updating student",
        extra={"student_id": str(student_id), "fields": sorted(request.model_fields_set)},
    )

    student = await student_service.update_student(student_id, request.model_dump(exclude_unset=True))
    return map_student_to_response(student)


@router.delete("/{student_id}", status_code=204)
@handle_domain_errors
async def delete_student(
    student_id: UUID,
    student_service: StudentService = Depends(get_student_service),
) -> None:
    """
    Delete student by ID.

    Raises:
        HTTPException(404): Student not found
    """
    await student_service.delete_student(student_id)


@router.post("/{student_id}/attendance", response_model=AttendanceResponse, status_code=201)
@handle_domain_errors
async def mark_attendance(
    student_id: UUID,
    request: MarkAttendanceRequest | None = None,
    student_service: StudentService = Depends(get_student_service),
) -> AttendanceResponse:
    """
    Register a check-in for today.

    Raises:
        HTTPException(404): Student not found
        HTTPException(400): Outside the attendance window
    """
    notes = request.notes if request else ""
    attendance = await student_service.mark_attendance(student_id, notes=notes)
    return AttendanceResponse(**attendance)


@router.get("/{student_id}/attendance", response_model=list[AttendanceResponse])
@handle_domain_errors
async def list_attendance(
    student_id: UUID,
    limit: int | None = None,
    student_service: StudentService = Depends(get_student_service),
) -> list[AttendanceResponse]:
    """
    List a student's check-ins, newest first.

    Raises:
        HTTPException(404): Student not found
    """
    validate_attendance_limit(limit)
    attendances = await student_service.get_attendances(student_id, limit=limit)
    return map_attendances_to_response(attendances)
