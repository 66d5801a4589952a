"""
Invoice domain models and schemas.

Request/response schemas for billing operations. Dates are ISO in responses;
requests also accept the Brazilian DD/MM/YYYY form.

Dependencies: pydantic
System role: Billing API contracts
"""

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from backend.core.dates import normalize_month, parse_date_input
from backend.core.enums import InvoicePaymentMethod, InvoiceStatus


def parse_optional_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    return parse_date_input(value)


def parse_optional_month(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return normalize_month(value)


class CreateInvoiceRequest(BaseModel):
    """
    Request schema for issuing an invoice.

    student_id, amount and due_date are checked by the service so a missing
    value reports the same error as a zero amount.
    """

    student_id: uuid.UUID | None = None
    student_name: str | None = Field(default=None, max_length=255)
    month: str | None = Field(default=None, description="Billing month 01-12 (defaults to due date month)")
    year: int | None = Field(default=None, description="Billing year (defaults to due date year)")
    amount: float | None = Field(default=None, allow_inf_nan=False)
    due_date: date | None = Field(default=None, description="ISO or DD/MM/YYYY")
    description: str | None = Field(default=None, max_length=512)
    pix_key: str | None = Field(default=None, max_length=255)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> date | None:
        return parse_optional_date(value)

    @field_validator("month", mode="before")
    @classmethod
    def parse_month(cls, value: Any) -> str | None:
        return parse_optional_month(value)


class UpdateInvoiceRequest(BaseModel):
    """Request schema for editing an invoice. Omitted fields stay unchanged."""

    student_name: str | None = Field(default=None, max_length=255)
    month: str | None = None
    year: int | None = None
    amount: float | None = Field(default=None, allow_inf_nan=False)
    due_date: date | None = None
    status: InvoiceStatus | None = None
    description: str | None = Field(default=None, max_length=512)
    pix_key: str | None = Field(default=None, max_length=255)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value: Any) -> date | None:
        return parse_optional_date(value)

    @field_validator("month", mode="before")
    @classmethod
    def parse_month(cls, value: Any) -> str | None:
        return parse_optional_month(value)


class MarkInvoicePaidRequest(BaseModel):
    payment_method: InvoicePaymentMethod


class GenerateInvoicesRequest(BaseModel):
    """Request schema for bulk monthly invoice generation."""

    month: str = Field(description="Billing month 01-12")
    year: int = Field(ge=2000, le=2100)
    due_day: int | None = Field(default=None, ge=1, le=31, description="Defaults to academy setting")
    pix_key: str | None = Field(default=None, max_length=255)

    @field_validator("month", mode="before")
    @classmethod
    def parse_month(cls, value: Any) -> str:
        return normalize_month(value)


class InvoiceResponse(BaseModel):
    """Response schema for invoice operations."""

    id: uuid.UUID
    student_id: uuid.UUID
    student_name: str
    month: str
    year: int
    amount: float
    due_date: date
    status: InvoiceStatus
    description: str
    pix_key: str
    paid_at: date | None = None
    payment_method: InvoicePaymentMethod | None = None
    created_at: datetime
    updated_at: datetime


class GenerateInvoicesResponse(BaseModel):
    created: list[InvoiceResponse]
    skipped: int = Field(description="Students that already had an invoice for the period")


class InvoiceStatsResponse(BaseModel):
    """Counts and amounts over a set of invoices, with BRL-formatted totals."""

    total: int
    paid: int
    pending: int
    overdue: int
    total_amount: float
    paid_amount: float
    pending_amount: float
    formatted_total_amount: str
    formatted_paid_amount: str
    formatted_pending_amount: str
