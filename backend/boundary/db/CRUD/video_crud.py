"""
Video CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Video library persistence operations
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.video_model import VideoModel
from backend.core.enums import BeltLevel


class VideoCRUD(BaseCRUD[VideoModel]):
    """CRUD operations for VideoModel, newest first."""

    default_order = "created_at"
    default_descending = True

    def __init__(self) -> None:
        """Initialize VideoCRUD with VideoModel."""
        super().__init__(VideoModel)

    async def get_by_belt(self, session: AsyncSession, belt: BeltLevel) -> Sequence[VideoModel]:
        return await self.find_by(session, belt=belt)


video_crud = VideoCRUD()
