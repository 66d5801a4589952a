"""
Transaction domain models and schemas.

Request/response schemas for the cash book and monthly statistics.

Dependencies: pydantic
System role: Financial API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from backend.core.enums import PaymentMethod, TransactionType


class CreateTransactionRequest(BaseModel):
    """Request schema for recording a transaction."""

    type: TransactionType = TransactionType.REVENUE
    amount: float = Field(allow_inf_nan=False, description="Amount in BRL, must be greater than zero")
    description: str = Field(default="", max_length=512)
    category: str | None = Field(default=None, max_length=100)
    payment_method: PaymentMethod | None = None
    student_id: uuid.UUID | None = None
    student_name: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=1024)


class UpdateTransactionRequest(BaseModel):
    """Request schema for editing a transaction. Omitted or blank fields stay unchanged."""

    type: TransactionType | None = None
    amount: float | None = Field(default=None, allow_inf_nan=False)
    description: str | None = Field(default=None, max_length=512)
    category: str | None = Field(default=None, max_length=100)
    payment_method: PaymentMethod | None = None
    student_id: uuid.UUID | None = None
    student_name: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=1024)


class TransactionResponse(BaseModel):
    """Response schema for transaction operations."""

    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category: str
    payment_method: PaymentMethod | None = None
    student_id: uuid.UUID | None = None
    student_name: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class MonthlyStatsResponse(BaseModel):
    """Revenue, expenses and profit of one calendar month."""

    year: int
    month: int
    revenue: float
    expenses: float
    profit: float
    revenue_growth: float = Field(description="Revenue change vs previous month, percent")
    transaction_count: int
