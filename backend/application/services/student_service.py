"""
Student service orchestrator.

Coordinates roster operations: enrollment with defaults, edits with belt
history, attendance check-ins and CSV export.

Dependencies: backend.boundary.db.CRUD, backend.core
System role: Student use case orchestration
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.attendance_crud import attendance_crud
from backend.boundary.db.CRUD.student_crud import student_crud
from backend.boundary.db.models.attendance_model import AttendanceModel
from backend.boundary.db.models.student_model import StudentModel
from backend.configs import get_settings
from backend.configs.academy import AcademySettings
from backend.core.dashboard_signal import DashboardSignal, dashboard_signal
from backend.core.dates import academy_now, next_payment_due
from backend.core.enums import BeltLevel, PaymentStatus, StudentStatus
from backend.core.exceptions import (
    AcademyException,
    ConflictError,
    StudentNotFoundError,
    ValidationError,
)
from backend.core.student_export import export_filename, students_to_csv
from backend.core.validators import validate_cpf, validate_email, validate_phone

logger = logging.getLogger(__name__)

INITIAL_BELT_NOTES = "Cadastro inicial"
DEFAULT_GRADUATION_NOTES = "Graduação"

UPDATABLE_FIELDS = {
    "name",
    "email",
    "cpf",
    "phone",
    "belt",
    "status",
    "payment_status",
    "monthly_fee",
    "last_payment",
    "next_payment_due",
}


def _monthly_fee(value: Any) -> float:
    try:
        fee = float(value or 0)
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid monthly fee", field="monthly_fee") from e
    if not math.isfinite(fee) or fee < 0:
        raise ValidationError("Invalid monthly fee", field="monthly_fee")
    return fee


def student_to_dict(student: StudentModel) -> dict[str, Any]:
    return {
        "id": student.id,
        "name": student.name,
        "email": student.email,
        "cpf": student.cpf,
        "phone": student.phone,
        "belt": student.belt,
        "status": student.status,
        "payment_status": student.payment_status,
        "monthly_fee": student.monthly_fee,
        "last_payment": student.last_payment,
        "next_payment_due": student.next_payment_due,
        "total_attendances": student.total_attendances,
        "belt_history": list(student.belt_history or []),
        "created_at": student.created_at,
        "updated_at": student.updated_at,
    }


def attendance_to_dict(attendance: AttendanceModel) -> dict[str, Any]:
    return {
        "id": attendance.id,
        "student_id": attendance.student_id,
        "student_name": attendance.student_name,
        "date": attendance.date,
        "timestamp": attendance.timestamp,
        "notes": attendance.notes,
    }


def _clean(value: Any) -> Any:
    """Trim strings; blank strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class StudentService:
    """
    Student service orchestrator.

    Attributes:
        db: Request-scoped async session
        settings: Academy settings (timezone, attendance window)
        signal: Dashboard refresh signal bumped on check-ins
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: AcademySettings | None = None,
        signal: DashboardSignal | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize student service.

        Args:
            db: Async SQLAlchemy session
            settings: Academy settings (loaded from environment when None)
            signal: Dashboard signal (process-wide signal when None)
            clock: Returns the current academy-local time; injectable for tests
        """
        self.db = db
        self.settings = settings or get_settings().academy
        self.signal = signal or dashboard_signal
        self._clock = clock or (lambda: academy_now(self.settings.timezone))

    def _now(self) -> datetime:
        return self._clock()

    async def _get_model(self, student_id: UUID) -> StudentModel:
        student = await student_crud.get_by_id(self.db, student_id)
        if not student:
            raise StudentNotFoundError(student_id)
        return student

    async def list_students(
        self,
        search: str | None = None,
        belt: BeltLevel | None = None,
        status: StudentStatus | None = None,
    ) -> list[dict]:
        """
        List students ordered by name.

        Args:
            search: Substring matched against name or email (case-insensitive)
            belt: Only this belt
            status: Only this enrollment status

        Returns:
            list[dict]: Student dicts
        """
        students = await student_crud.search(self.db, term=search, belt=belt, status=status)
        return [student_to_dict(s) for s in students]

    async def get_by_status(self, status: StudentStatus) -> list[dict]:
        return await self.list_students(status=status)

    async def get_by_belt(self, belt: BeltLevel) -> list[dict]:
        return await self.list_students(belt=belt)

    async def get_student(self, student_id: UUID) -> dict:
        """
        Get student by ID.

        Raises:
            StudentNotFoundError: If the student does not exist
        """
        return student_to_dict(await self._get_model(student_id))

    async def add_student(self, data: dict[str, Any]) -> dict:
        """
        Enroll a student.

        Name and email are required; email must be valid and unused. Missing
        fields get enrollment defaults and the belt history starts with the
        enrollment belt.

        Args:
            data: Student fields (name, email, cpf, phone, belt, status, monthly_fee)

        Returns:
            dict: Created student

        Raises:
            ValidationError: Missing name/email, invalid email, phone or CPF
            ConflictError: Email already registered
        """
        name = _clean(data.get("name"))
        email = _clean(data.get("email"))
        if not name or not email:
            raise ValidationError("Name and email are required")

        email = email.lower()
        if not validate_email(email):
            raise ValidationError("Invalid email", field="email")

        phone = _clean(data.get("phone"))
        if phone and not validate_phone(phone):
            raise ValidationError("Invalid phone (use format: (00) 00000-0000)", field="phone")

        cpf = _clean(data.get("cpf"))
        if cpf and not validate_cpf(cpf):
            raise ValidationError("Invalid CPF", field="cpf")

        try:
            if await student_crud.get_by_email(self.db, email):
                raise ConflictError("Email already registered", details={"email": email})

            now = self._now().astimezone(timezone.utc)
            belt = BeltLevel(data.get("belt") or BeltLevel.BRANCA)

            student = await student_crud.create(
                self.db,
                name=name,
                email=email,
                cpf=cpf,
                phone=phone,
                belt=belt,
                status=StudentStatus(data.get("status") or StudentStatus.ACTIVE),
                payment_status=PaymentStatus(data.get("payment_status") or PaymentStatus.PAID),
                monthly_fee=_monthly_fee(data.get("monthly_fee")),
                last_payment=now,
                next_payment_due=next_payment_due(now),
                total_attendances=0,
                belt_history=[
                    {
                        "from": BeltLevel.BRANCA.value,
                        "to": belt.value,
                        "date": now.isoformat(),
                        "notes": INITIAL_BELT_NOTES,
                    }
                ],
            )
            logger.info(
                "Student enrolled",
                extra={"student_id": str(student.id), "belt": belt.value},
            )
            self.signal.notify("student.created")
            return student_to_dict(student)
        except AcademyException:
            raise
        except Exception as e:
            logger.error("Failed to enroll student", extra={"error": str(e), "email": email})
            raise

    async def update_student(self, student_id: UUID, updates: dict[str, Any]) -> dict:
        """
        Apply edits to a student.

        Strings are trimmed and blank values are ignored. Changing the belt
        appends a promotion to the belt history.

        Args:
            student_id: Student UUID
            updates: Fields to change; "graduation_notes" annotates a belt change

        Returns:
            dict: Updated student

        Raises:
            StudentNotFoundError: If the student does not exist
            ValidationError: Invalid email, phone or CPF
            ConflictError: Email belongs to another student
        """
        student = await self._get_model(student_id)

        values: dict[str, Any] = {}
        for key, raw in updates.items():
            if key not in UPDATABLE_FIELDS:
                continue
            value = _clean(raw)
            if value is not None:
                values[key] = value

        if "email" in values:
            values["email"] = values["email"].lower()
            if not validate_email(values["email"]):
                raise ValidationError("Invalid email", field="email")
            owner = await student_crud.get_by_email(self.db, values["email"])
            if owner and owner.id != student.id:
                raise ConflictError("Email already registered", details={"email": values["email"]})
        if "phone" in values and not validate_phone(values["phone"]):
            raise ValidationError("Invalid phone", field="phone")
        if "cpf" in values and not validate_cpf(values["cpf"]):
            raise ValidationError("Invalid CPF", field="cpf")
        if "monthly_fee" in values:
            values["monthly_fee"] = _monthly_fee(values["monthly_fee"])

        new_belt = values.get("belt")
        if new_belt is not None and BeltLevel(new_belt) is not BeltLevel(student.belt):
            history = list(student.belt_history or [])
            history.append(
                {
                    "from": BeltLevel(student.belt).value,
                    "to": BeltLevel(new_belt).value,
                    "date": self._now().astimezone(timezone.utc).isoformat(),
                    "notes": _clean(updates.get("graduation_notes")) or DEFAULT_GRADUATION_NOTES,
                }
            )
            values["belt_history"] = history

        if not values:
            return student_to_dict(student)

        try:
            updated = await student_crud.update_by_id(self.db, student_id, **values)
            if not updated:
                raise StudentNotFoundError(student_id)
            logger.info(
                "Student updated",
                extra={"student_id": str(student_id), "updates": sorted(values.keys())},
            )
            self.signal.notify("student.updated")
            return student_to_dict(updated)
        except AcademyException:
            raise
        except Exception as e:
            logger.error(
                "Failed to update student",
                extra={"error": str(e), "student_id": str(student_id)},
            )
            raise

    async def delete_student(self, student_id: UUID) -> bool:
        """
        Delete a student.

        Invoices, transactions and attendances referencing the student are
        kept as they are.

        Raises:
            StudentNotFoundError: If the student does not exist
        """
        deleted = await student_crud.delete_by_id(self.db, student_id)
        if not deleted:
            raise StudentNotFoundError(student_id)
        logger.info("Student deleted", extra={"student_id": str(student_id)})
        self.signal.notify("student.deleted")
        return True

    async def mark_attendance(self, student_id: UUID, notes: str = "") -> dict:
        """
        Register a class check-in.

        Args:
            student_id: Student UUID
            notes: Optional notes

        Returns:
            dict: Created attendance

        Raises:
            StudentNotFoundError: If the student does not exist
            ValidationError: Outside the attendance window (academy local time)
        """
        student = await self._get_model(student_id)

        now = self._now()
        if now.hour < self.settings.attendance_open_hour or now.hour > self.settings.attendance_close_hour:
            raise ValidationError(
                f"Attendance can only be registered between "
                f"{self.settings.attendance_open_hour}h and {self.settings.attendance_close_hour}h",
                details={"hour": now.hour},
            )

        try:
            attendance = await attendance_crud.create(
                self.db,
                student_id=student.id,
                student_name=student.name,
                date=now.date().isoformat(),
                timestamp=now.astimezone(timezone.utc),
                notes=(notes or "").strip(),
            )
            await student_crud.increment_attendances(self.db, student.id)
        except Exception as e:
            logger.error(
                "Failed to register attendance",
                extra={"error": str(e), "student_id": str(student_id)},
            )
            raise

        logger.info(
            "Attendance registered",
            extra={"student_id": str(student_id), "attendance_date": attendance.date},
        )
        self.signal.notify("attendance.marked")
        return attendance_to_dict(attendance)

    async def get_attendances(self, student_id: UUID, limit: int | None = None) -> list[dict]:
        """
        List a student's check-ins, newest first.

        Raises:
            StudentNotFoundError: If the student does not exist
        """
        await self._get_model(student_id)
        attendances = await attendance_crud.get_for_student(self.db, student_id, limit=limit)
        return [attendance_to_dict(a) for a in attendances]

    async def export_csv(
        self,
        search: str | None = None,
        belt: BeltLevel | None = None,
        status: StudentStatus | None = None,
    ) -> tuple[str, str]:
        """
        Export the filtered roster as CSV.

        Returns:
            tuple: (csv text, download filename "alunos_YYYY-MM-DD.csv")
        """
        students = await student_crud.search(self.db, term=search, belt=belt, status=status)
        content = students_to_csv(students)
        filename = export_filename(self._now().date())
        logger.info("Roster exported", extra={"count": len(students), "export_file": filename})
        return content, filename
