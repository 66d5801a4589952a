"""
Test suite for the domain exception hierarchy.

System role: Verification of error messages and context
"""

import uuid

from backend.core.exceptions import (
    AcademyException,
    ConflictError,
    InvoiceNotFoundError,
    NotFoundError,
    StudentNotFoundError,
    ValidationError,
)


def test_validation_error_records_field() -> None:
    error = ValidationError("Invalid email", field="email")
    assert str(error) == "Invalid email"
    assert error.field == "email"
    assert error.details == {"field": "email"}


def test_not_found_message_names_resource() -> None:
    record_id = uuid.uuid4()
    error = StudentNotFoundError(record_id)
    assert isinstance(error, NotFoundError)
    assert str(error) == f"Student not found: {record_id}"
    assert error.details["id"] == str(record_id)


def test_hierarchy_shares_base() -> None:
    for error in (ConflictError("dup"), InvoiceNotFoundError("x"), ValidationError("bad")):
        assert isinstance(error, AcademyException)
