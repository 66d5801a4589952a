"""
Video API endpoints.

Routes:
- GET /videos - List videos (any signed-in user; belt filter)
- GET /videos/{id} - Get single video (any signed-in user)
- POST /videos - Add video (admin)
- PUT /videos/{id} - Update video (admin)
- DELETE /videos/{id} - Delete video (admin)

Dependencies: backend.application.services, backend.models
System role: Video library HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from backend.api.deps import get_current_user, get_video_service, require_admin
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import VideoService
from backend.core.enums import BeltLevel
from backend.models.video import CreateVideoRequest, UpdateVideoRequest, VideoResponse

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=list[VideoResponse], dependencies=[Depends(get_current_user)])
@handle_domain_errors
async def list_videos(
    belt: BeltLevel | None = None,
    video_service: VideoService = Depends(get_video_service),
) -> list[VideoResponse]:
    """List videos newest first, optionally for one belt."""
    videos = await video_service.list_videos(belt=belt)
    return [VideoResponse(**v) for v in videos]


@router.get("/{video_id}", response_model=VideoResponse, dependencies=[Depends(get_current_user)])
@handle_domain_errors
async def get_video(
    video_id: UUID,
    video_service: VideoService = Depends(get_video_service),
) -> VideoResponse:
    video = await video_service.get_video(video_id)
    return VideoResponse(**video)


@router.post("", response_model=VideoResponse, status_code=201, dependencies=[Depends(require_admin)])
@handle_domain_errors
async def create_video(
    request: CreateVideoRequest,
    video_service: VideoService = Depends(get_video_service),
) -> VideoResponse:
    """
    Add a video.

    Raises:
        HTTPException(400): Missing title/url, invalid URL or duration
    """
    video = await video_service.create_video(request.model_dump())
    return VideoResponse(**video)


@router.put("/{video_id}", response_model=VideoResponse, dependencies=[Depends(require_admin)])
@handle_domain_errors
async def update_video(
    video_id: UUID,
    request: UpdateVideoRequest,
    video_service: VideoService = Depends(get_video_service),
) -> VideoResponse:
    video = await video_service.update_video(video_id, request.model_dump(exclude_unset=True))
    return VideoResponse(**video)


@router.delete("/{video_id}", status_code=204, dependencies=[Depends(require_admin)])
@handle_domain_errors
async def delete_video(
    video_id: UUID,
    video_service: VideoService = Depends(get_video_service),
) -> None:
    await video_service.delete_video(video_id)
