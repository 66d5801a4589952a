"""
Authentication models and schemas.

Dependencies: pydantic
System role: Sign-in, registration and profile API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from backend.core.enums import UserRole
from backend.models.invoice import InvoiceResponse
from backend.models.student import AttendanceResponse, StudentResponse


class LoginRequest(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(max_length=128)


class RegisterUserRequest(BaseModel):
    """Request schema for creating an account (admin only)."""

    email: str = Field(max_length=255)
    password: str = Field(max_length=128)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.STUDENT
    student_id: uuid.UUID | None = None


class UserResponse(BaseModel):
    """Public user profile (never includes the password hash)."""

    id: uuid.UUID
    email: str
    name: str
    role: UserRole
    student_id: uuid.UUID | None = None
    created_at: datetime


class TokenResponse(BaseModel):
    """Bearer token issued at sign-in."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


class MeResponse(BaseModel):
    """Profile plus, for students, their own record, attendances and invoices."""

    user: UserResponse
    student: StudentResponse | None = None
    attendances: list[AttendanceResponse] = Field(default_factory=list)
    invoices: list[InvoiceResponse] = Field(default_factory=list)
