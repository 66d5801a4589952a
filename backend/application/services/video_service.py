"""
Video service orchestrator.

Coordinates the technique video library.

Dependencies: backend.boundary.db.CRUD, backend.core
System role: Video library use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.video_crud import video_crud
from backend.boundary.db.models.video_model import VideoModel
from backend.core.enums import BeltLevel
from backend.core.exceptions import ValidationError, VideoNotFoundError
from backend.core.validators import validate_duration, validate_url

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "description", "url", "belt", "duration"}


def video_to_dict(video: VideoModel) -> dict[str, Any]:
    return {
        "id": video.id,
        "title": video.title,
        "description": video.description,
        "url": video.url,
        "belt": video.belt,
        "duration": video.duration,
        "created_at": video.created_at,
        "updated_at": video.updated_at,
    }


def _check_url(url: str) -> None:
    if not validate_url(url):
        raise ValidationError("Invalid URL", field="url")


def _check_duration(duration: str) -> None:
    if not validate_duration(duration):
        raise ValidationError("Invalid duration (use MM:SS)", field="duration")


class VideoService:
    """Video service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize video service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_videos(self, belt: BeltLevel | None = None) -> list[dict]:
        """Videos newest first, optionally for one belt."""
        if belt is not None:
            videos = await video_crud.get_by_belt(self.db, BeltLevel(belt))
        else:
            videos = await video_crud.get_all(self.db)
        return [video_to_dict(v) for v in videos]

    async def get_video(self, video_id: UUID) -> dict:
        video = await video_crud.get_by_id(self.db, video_id)
        if not video:
            raise VideoNotFoundError(video_id)
        return video_to_dict(video)

    async def create_video(self, data: dict[str, Any]) -> dict:
        """
        Add a video to the library.

        Args:
            data: title, url, duration (required), description, belt

        Returns:
            dict: Created video

        Raises:
            ValidationError: Missing title/url, invalid URL or duration
        """
        title = (data.get("title") or "").strip()
        url = (data.get("url") or "").strip()
        if not title or not url:
            raise ValidationError("Title and URL are required")
        _check_url(url)

        duration = (data.get("duration") or "").strip()
        _check_duration(duration)

        try:
            video = await video_crud.create(
                self.db,
                title=title,
                description=(data.get("description") or "").strip(),
                url=url,
                belt=BeltLevel(data.get("belt") or BeltLevel.BRANCA),
                duration=duration,
            )
        except Exception as e:
            logger.error("Failed to create video", extra={"error": str(e), "title": title})
            raise

        logger.info("Video created", extra={"video_id": str(video.id), "belt": video.belt.value})
        return video_to_dict(video)

    async def update_video(self, video_id: UUID, updates: dict[str, Any]) -> dict:
        """
        Edit a video. Omitted and blank fields stay unchanged.

        Raises:
            VideoNotFoundError: If the video does not exist
            ValidationError: Invalid URL or duration
        """
        values: dict[str, Any] = {}
        for key, value in updates.items():
            if key not in UPDATABLE_FIELDS or value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if not value and key != "description":
                    continue
            values[key] = value

        if "url" in values:
            _check_url(values["url"])
        if "duration" in values:
            _check_duration(values["duration"])

        if not values:
            return await self.get_video(video_id)

        updated = await video_crud.update_by_id(self.db, video_id, **values)
        if not updated:
            raise VideoNotFoundError(video_id)

        logger.info("Video updated", extra={"video_id": str(video_id), "updates": sorted(values.keys())})
        return video_to_dict(updated)

    async def delete_video(self, video_id: UUID) -> bool:
        deleted = await video_crud.delete_by_id(self.db, video_id)
        if not deleted:
            raise VideoNotFoundError(video_id)
        logger.info("Video deleted", extra={"video_id": str(video_id)})
        return True
