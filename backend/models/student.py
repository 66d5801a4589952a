"""
Student domain models and schemas.

Request/response schemas for roster and attendance operations.

Dependencies: pydantic
System role: Student API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from backend.core.enums import BeltLevel, PaymentStatus, StudentStatus


class BeltHistoryEntry(BaseModel):
    """One belt promotion. Serialized with the key "from"."""

    model_config = ConfigDict(populate_by_name=True)

    from_: BeltLevel = Field(alias="from")
    to: BeltLevel
    date: datetime
    notes: str | None = None


class CreateStudentRequest(BaseModel):
    """Request schema for enrolling a student."""

    name: str = Field(default="", max_length=255, description="Full name")
    email: str = Field(default="", max_length=255, description="Contact email")
    cpf: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=20)
    belt: BeltLevel = BeltLevel.BRANCA
    status: StudentStatus = StudentStatus.ACTIVE
    payment_status: PaymentStatus = PaymentStatus.PAID
    monthly_fee: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Monthly fee in BRL")


class UpdateStudentRequest(BaseModel):
    """Request schema for editing a student. Omitted or blank fields stay unchanged."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    cpf: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=20)
    belt: BeltLevel | None = None
    status: StudentStatus | None = None
    payment_status: PaymentStatus | None = None
    monthly_fee: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    last_payment: datetime | None = None
    next_payment_due: datetime | None = None
    graduation_notes: str | None = Field(
        default=None,
        max_length=1024,
        description="Notes stored in belt history when the belt changes",
    )


class StudentResponse(BaseModel):
    """Response schema for student operations."""

    id: uuid.UUID
    name: str
    email: str
    cpf: str | None = None
    phone: str | None = None
    belt: BeltLevel
    status: StudentStatus
    payment_status: PaymentStatus
    monthly_fee: float
    last_payment: datetime | None = None
    next_payment_due: datetime | None = None
    total_attendances: int
    belt_history: list[BeltHistoryEntry] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MarkAttendanceRequest(BaseModel):
    notes: str = Field(default="", max_length=1024)


class AttendanceResponse(BaseModel):
    """Response schema for a check-in."""

    id: uuid.UUID
    student_id: uuid.UUID
    student_name: str
    date: str
    timestamp: datetime
    notes: str
