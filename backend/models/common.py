"""
Common response models and utilities.

Generic response wrappers and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: Any = Field(description="Error message or validation errors")


class MessageResponse(BaseModel):
    """Plain acknowledgement for actions without a resource body."""

    message: str
