"""
Test suite for StudentService.

Tests enrollment defaults and validation, edits with belt history,
attendance window and counters, and the CSV export. Runs against the
in-memory database with a fixed academy clock.

System role: Verification of student use case orchestration
"""

import uuid
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from backend.application.services.student_service import StudentService
from backend.core.enums import BeltLevel, PaymentStatus, StudentStatus
from backend.core.exceptions import ConflictError, StudentNotFoundError, ValidationError


@pytest.fixture
def service(test_async_db, academy_settings, signal, local_now) -> StudentService:
    """StudentService frozen at 15/03/2025 10:00 local time."""
    return StudentService(test_async_db, settings=academy_settings, signal=signal, clock=lambda: local_now)


async def _enroll(service: StudentService, **overrides) -> dict:
    data = {"name": "João Silva", "email": "joao@academia.com", "monthly_fee": 150}
    data.update(overrides)
    return await service.add_student(data)


class TestAddStudent:
    """Test suite for StudentService.add_student()."""

    @pytest.mark.asyncio
    async def test_applies_enrollment_defaults(self, service: StudentService) -> None:
        # Act
        student = await _enroll(service, email="  JOAO@Academia.com ")

        # Assert
        assert student["email"] == "joao@academia.com"
        assert student["belt"] is BeltLevel.BRANCA
        assert student["status"] is StudentStatus.ACTIVE
        assert student["payment_status"] is PaymentStatus.PAID
        assert student["total_attendances"] == 0
        assert student["monthly_fee"] == 150.0

    @pytest.mark.asyncio
    async def test_sets_payment_dates_one_month_apart(self, service: StudentService) -> None:
        student = await _enroll(service)

        last_payment = student["last_payment"].replace(tzinfo=timezone.utc)
        next_due = student["next_payment_due"].replace(tzinfo=timezone.utc)
        assert last_payment == datetime(2025, 3, 15, 13, 0, tzinfo=timezone.utc)
        assert next_due == datetime(2025, 4, 15, 13, 0, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_starts_belt_history_with_enrollment_belt(self, service: StudentService) -> None:
        student = await _enroll(service, belt=BeltLevel.AZUL)

        assert student["belt_history"] == [
            {
                "from": "Branca",
                "to": "Azul",
                "date": "2025-03-15T13:00:00+00:00",
                "notes": "Cadastro inicial",
            }
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("data", "message"),
        [
            ({"name": "", "email": "a@b.com"}, "Name and email are required"),
            ({"name": "Ana", "email": "   "}, "Name and email are required"),
            ({"name": "Ana", "email": "ana.com"}, "Invalid email"),
            ({"name": "Ana", "email": "ana@b.com", "phone": "123"}, "Invalid phone"),
            ({"name": "Ana", "email": "ana@b.com", "cpf": "123.456"}, "Invalid CPF"),
        ],
    )
    async def test_rejects_invalid_input(self, service: StudentService, data: dict, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            await service.add_student(data)

    @pytest.mark.asyncio
    async def test_rejects_duplicate_email(self, service: StudentService) -> None:
        await _enroll(service)

        with pytest.raises(ConflictError):
            await _enroll(service, name="Outro", email="JOAO@academia.com")

    @pytest.mark.asyncio
    async def test_enrollment_signals_dashboard(self, service: StudentService, signal) -> None:
        await _enroll(service)

        snapshot = signal.snapshot()
        assert snapshot.revision == 1
        assert snapshot.reason == "student.created"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fee", [float("nan"), float("inf"), -10])
    async def test_rejects_invalid_monthly_fee(self, service: StudentService, signal, fee: float) -> None:
        with pytest.raises(ValidationError, match="monthly fee"):
            await _enroll(service, monthly_fee=fee)
        assert signal.snapshot().revision == 0


class TestUpdateStudent:
    """Test suite for StudentService.update_student()."""

    @pytest.mark.asyncio
    async def test_belt_change_appends_history(self, service: StudentService) -> None:
        # Arrange
        student = await _enroll(service)

        # Act
        updated = await service.update_student(
            student["id"],
            {"belt": BeltLevel.AZUL, "graduation_notes": "Exame de faixa"},
        )

        # Assert
        assert updated["belt"] is BeltLevel.AZUL
        assert len(updated["belt_history"]) == 2
        assert updated["belt_history"][-1]["from"] == "Branca"
        assert updated["belt_history"][-1]["to"] == "Azul"
        assert updated["belt_history"][-1]["notes"] == "Exame de faixa"

    @pytest.mark.asyncio
    async def test_default_graduation_notes(self, service: StudentService) -> None:
        student = await _enroll(service)
        updated = await service.update_student(student["id"], {"belt": "Roxa"})
        assert updated["belt_history"][-1]["notes"] == "Graduação"

    @pytest.mark.asyncio
    async def test_same_belt_keeps_history(self, service: StudentService) -> None:
        student = await _enroll(service)
        updated = await service.update_student(student["id"], {"belt": BeltLevel.BRANCA, "name": "João S."})
        assert len(updated["belt_history"]) == 1
        assert updated["name"] == "João S."

    @pytest.mark.asyncio
    async def test_blank_fields_are_ignored(self, service: StudentService) -> None:
        student = await _enroll(service)
        updated = await service.update_student(student["id"], {"name": "  ", "phone": ""})
        assert updated["name"] == "João Silva"
        assert updated["phone"] is None

    @pytest.mark.asyncio
    async def test_email_taken_by_other_student(self, service: StudentService) -> None:
        await _enroll(service, email="ana@academia.com", name="Ana")
        student = await _enroll(service)

        with pytest.raises(ConflictError):
            await service.update_student(student["id"], {"email": "ana@academia.com"})

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, service: StudentService) -> None:
        student = await _enroll(service)
        updated = await service.update_student(student["id"], {"email": "joao@academia.com", "monthly_fee": 180})
        assert updated["monthly_fee"] == 180

    @pytest.mark.asyncio
    async def test_missing_student(self, service: StudentService) -> None:
        with pytest.raises(StudentNotFoundError):
            await service.update_student(uuid.uuid4(), {"name": "X"})

    @pytest.mark.asyncio
    async def test_status_change_signals_dashboard(self, service: StudentService, signal) -> None:
        student = await _enroll(service)

        await service.update_student(student["id"], {"status": StudentStatus.INACTIVE})

        snapshot = signal.snapshot()
        assert snapshot.revision == 2
        assert snapshot.reason == "student.updated"

    @pytest.mark.asyncio
    async def test_empty_update_does_not_signal(self, service: StudentService, signal) -> None:
        student = await _enroll(service)

        await service.update_student(student["id"], {"name": " "})

        assert signal.snapshot().revision == 1

    @pytest.mark.asyncio
    async def test_rejects_non_finite_monthly_fee(self, service: StudentService) -> None:
        student = await _enroll(service)
        with pytest.raises(ValidationError, match="monthly fee"):
            await service.update_student(student["id"], {"monthly_fee": float("nan")})


class TestListAndDelete:
    @pytest.mark.asyncio
    async def test_filters(self, service: StudentService) -> None:
        await _enroll(service, name="Ana", email="ana@academia.com", belt=BeltLevel.AZUL)
        await _enroll(service, name="Bruno", email="bruno@academia.com", status=StudentStatus.INACTIVE)

        assert [s["name"] for s in await service.list_students()] == ["Ana", "Bruno"]
        assert [s["name"] for s in await service.list_students(search="BRU")] == ["Bruno"]
        assert [s["name"] for s in await service.get_by_belt(BeltLevel.AZUL)] == ["Ana"]
        assert [s["name"] for s in await service.get_by_status(StudentStatus.INACTIVE)] == ["Bruno"]

    @pytest.mark.asyncio
    async def test_delete(self, service: StudentService, signal) -> None:
        student = await _enroll(service)

        assert await service.delete_student(student["id"]) is True
        assert signal.snapshot().reason == "student.deleted"
        with pytest.raises(StudentNotFoundError):
            await service.get_student(student["id"])
        with pytest.raises(StudentNotFoundError):
            await service.delete_student(student["id"])


class TestMarkAttendance:
    """Test suite for StudentService.mark_attendance()."""

    @pytest.mark.asyncio
    async def test_records_check_in_and_bumps_counter(self, service: StudentService, signal) -> None:
        # Arrange
        student = await _enroll(service)

        # Act
        attendance = await service.mark_attendance(student["id"], notes=" Treino de guarda ")

        # Assert
        assert attendance["date"] == "2025-03-15"
        assert attendance["student_name"] == "João Silva"
        assert attendance["notes"] == "Treino de guarda"
        assert (await service.get_student(student["id"]))["total_attendances"] == 1
        assert signal.snapshot().reason == "attendance.marked"

    @pytest.mark.asyncio
    async def test_counter_counts_every_check_in(self, service: StudentService) -> None:
        student = await _enroll(service)

        await service.mark_attendance(student["id"])
        await service.mark_attendance(student["id"])

        assert (await service.get_student(student["id"]))["total_attendances"] == 2

    @pytest.mark.asyncio
    async def test_local_date_is_used_late_at_night(self, test_async_db, academy_settings, signal) -> None:
        """Test 22:30 local on the 15th is recorded on the 15th even though UTC is already the 16th."""
        late = datetime(2025, 3, 15, 22, 30, tzinfo=ZoneInfo("America/Sao_Paulo"))
        service = StudentService(test_async_db, settings=academy_settings, signal=signal, clock=lambda: late)
        student = await _enroll(service)

        attendance = await service.mark_attendance(student["id"])

        assert attendance["date"] == "2025-03-15"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hour", [5, 0])
    async def test_outside_window_rejected(self, test_async_db, academy_settings, signal, hour: int) -> None:
        early = datetime(2025, 3, 15, hour, 30, tzinfo=ZoneInfo("America/Sao_Paulo"))
        service = StudentService(test_async_db, settings=academy_settings, signal=signal, clock=lambda: early)
        student = await _enroll(service)

        with pytest.raises(ValidationError, match="between 6h and 23h"):
            await service.mark_attendance(student["id"])
        assert signal.snapshot().revision == 1

    @pytest.mark.asyncio
    async def test_unknown_student(self, service: StudentService) -> None:
        with pytest.raises(StudentNotFoundError):
            await service.mark_attendance(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_attendances_newest_first(self, service: StudentService) -> None:
        student = await _enroll(service)
        await service.mark_attendance(student["id"], notes="primeira")
        await service.mark_attendance(student["id"], notes="segunda")

        history = await service.get_attendances(student["id"])
        limited = await service.get_attendances(student["id"], limit=1)

        assert len(history) == 2
        assert len(limited) == 1


class TestExportCsv:
    @pytest.mark.asyncio
    async def test_export_filtered_roster(self, service: StudentService) -> None:
        await _enroll(service, name="Ana", email="ana@academia.com", belt=BeltLevel.AZUL)
        await _enroll(service, name="Bruno", email="bruno@academia.com")

        content, filename = await service.export_csv(belt=BeltLevel.AZUL)

        assert filename == "alunos_2025-03-15.csv"
        lines = content.splitlines()
        assert len(lines) == 2
        assert lines[1] == '"Ana","ana@academia.com","Azul","Ativo","R$ 150.00","0"'
