"""
Test suite for VideoService.

System role: Verification of the technique video library
"""

import uuid

import pytest

from backend.application.services.video_service import VideoService
from backend.core.enums import BeltLevel
from backend.core.exceptions import ValidationError, VideoNotFoundError


@pytest.fixture
def service(test_async_db) -> VideoService:
    return VideoService(test_async_db)


async def _create(service: VideoService, **overrides) -> dict:
    data = {
        "title": "Armlock da guarda",
        "url": "https://www.youtube.com/watch?v=abc",
        "duration": "05:30",
        "belt": BeltLevel.BRANCA,
    }
    data.update(overrides)
    return await service.create_video(data)


class TestCreateVideo:
    @pytest.mark.asyncio
    async def test_creates_with_defaults(self, service: VideoService) -> None:
        video = await _create(service, belt=None, description=None)

        assert video["belt"] is BeltLevel.BRANCA
        assert video["description"] == ""
        assert video["duration"] == "05:30"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"title": " "}, "Title and URL are required"),
            ({"url": ""}, "Title and URL are required"),
            ({"url": "youtube.com/abc"}, "Invalid URL"),
            ({"duration": "5 minutos"}, "Invalid duration"),
        ],
    )
    async def test_rejects_invalid(self, service: VideoService, overrides: dict, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            await _create(service, **overrides)


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_by_belt(self, service: VideoService) -> None:
        await _create(service, title="Passagem", belt=BeltLevel.AZUL)
        await _create(service, title="Armlock")

        assert {v["title"] for v in await service.list_videos()} == {"Passagem", "Armlock"}
        assert [v["title"] for v in await service.list_videos(belt=BeltLevel.AZUL)] == ["Passagem"]

    @pytest.mark.asyncio
    async def test_get_missing(self, service: VideoService) -> None:
        with pytest.raises(VideoNotFoundError):
            await service.get_video(uuid.uuid4())


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_allows_clearing_description(self, service: VideoService) -> None:
        video = await _create(service, description="Detalhes")

        updated = await service.update_video(video["id"], {"description": "", "title": "  ", "duration": "10:00"})

        assert updated["description"] == ""
        assert updated["title"] == "Armlock da guarda"
        assert updated["duration"] == "10:00"

    @pytest.mark.asyncio
    async def test_update_validates_url(self, service: VideoService) -> None:
        video = await _create(service)
        with pytest.raises(ValidationError, match="Invalid URL"):
            await service.update_video(video["id"], {"url": "nope"})

    @pytest.mark.asyncio
    async def test_update_missing(self, service: VideoService) -> None:
        with pytest.raises(VideoNotFoundError):
            await service.update_video(uuid.uuid4(), {"title": "X"})

    @pytest.mark.asyncio
    async def test_delete(self, service: VideoService) -> None:
        video = await _create(service)

        assert await service.delete_video(video["id"]) is True
        with pytest.raises(VideoNotFoundError):
            await service.delete_video(video["id"])
