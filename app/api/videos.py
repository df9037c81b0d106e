from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger

from app.core.telegram import get_bot
from app.db.registry import get_registry
from app.schemas.video import (
    MarkViewedRequest,
    MarkViewedResponse,
    VideoListResponse,
)
from app.services.media_service import MediaService
from app.services.video_registry import InvalidSelectorError, VideoRegistry

videos_router = APIRouter()


@videos_router.get("", response_model=VideoListResponse)
async def list_videos(registry: VideoRegistry = Depends(get_registry)):
    snapshot = registry.snapshot()
    return VideoListResponse(
        count=len(snapshot.videos),
        videos=snapshot.videos,
        last_viewed_video_index=snapshot.cursor,
    )


@videos_router.post("/mark-as-viewed", response_model=MarkViewedResponse)
async def mark_as_viewed(
    payload: MarkViewedRequest,
    registry: VideoRegistry = Depends(get_registry),
):
    try:
        cursor = registry.advance_cursor(index=payload.index, video_id=payload.video_id)
    except InvalidSelectorError as e:
        logger.warning(f"Mark as viewed rejected (index={payload.index}, videoId={payload.video_id})")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return MarkViewedResponse(
        message="Video marked as viewed. Next video available.",
        next_video_index=cursor,
    )


@videos_router.get("/{video_id}/file")
async def video_file(
    video_id: str,
    registry: VideoRegistry = Depends(get_registry),
    bot: Bot = Depends(get_bot),
):
    video = registry.find(video_id)
    if video is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Video not found.")

    try:
        content, media_type = await MediaService(bot).download(video)
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TelegramAPIError as e:
        logger.error(f"Error downloading video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch video: {e.message}",
        )

    return Response(content=content, media_type=media_type)
