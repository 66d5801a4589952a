"""
Domain enumerations.

String enums shared by ORM models, Pydantic schemas and core functions.
Values match what is stored in the record store and sent over the wire.

Dependencies: enum (stdlib)
System role: Closed vocabularies for the academy domain
"""

import enum


class BeltLevel(str, enum.Enum):
    """
    Student belt rank, lowest to highest.

    Declaration order is the rank order; use `rank` for comparisons.
    """

    BRANCA = "Branca"
    AZUL = "Azul"
    ROXA = "Roxa"
    MARROM = "Marrom"
    PRETA = "Preta"

    @property
    def rank(self) -> int:
        return list(BeltLevel).index(self)


class StudentStatus(str, enum.Enum):
    """Enrollment state of a student."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class PaymentStatus(str, enum.Enum):
    """Monthly fee payment state shown on the student record."""

    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class InvoiceStatus(str, enum.Enum):
    """
    Invoice lifecycle state.

    PENDING: Issued, due date not yet passed
    PAID: Payment registered (paid_at and payment_method set)
    OVERDUE: Not paid and due date already passed
    """

    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class TransactionType(str, enum.Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


class PaymentMethod(str, enum.Enum):
    """Payment method recorded on cash-book transactions."""

    CASH = "cash"
    CREDIT = "credit"
    DEBIT = "debit"
    PIX = "pix"
    TRANSFER = "transfer"


class InvoicePaymentMethod(str, enum.Enum):
    """Payment method used to settle an invoice."""

    PIX = "pix"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    STUDENT = "student"
