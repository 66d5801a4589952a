"""
Video domain models and schemas.

Dependencies: pydantic
System role: Video library API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from backend.core.enums import BeltLevel


class CreateVideoRequest(BaseModel):
    """Request schema for adding a video."""

    title: str = Field(default="", max_length=255)
    description: str = Field(default="", max_length=4096)
    url: str = Field(default="", max_length=2048)
    belt: BeltLevel = BeltLevel.BRANCA
    duration: str = Field(default="", description="MM:SS")


class UpdateVideoRequest(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=4096)
    url: str | None = Field(default=None, max_length=2048)
    belt: BeltLevel | None = None
    duration: str | None = None


class VideoResponse(BaseModel):
    """Response schema for video operations."""

    id: uuid.UUID
    title: str
    description: str
    url: str
    belt: BeltLevel
    duration: str
    created_at: datetime
    updated_at: datetime
