from fastapi import APIRouter, Depends

from app.core.config import TelegramSettings, get_telegram_settings
from app.db.registry import get_registry
from app.schemas.events import (
    ReactionEvent,
    ReactionRemovedEvent,
    ReactionResult,
    UploadEvent,
    UploadResult,
)
from app.services.event_service import VideoEventService
from app.services.video_registry import VideoRegistry
from app.utils.security import verify_bot_token

events_router = APIRouter(dependencies=[Depends(verify_bot_token)])


def get_event_service(
    registry: VideoRegistry = Depends(get_registry),
    settings: TelegramSettings = Depends(get_telegram_settings),
) -> VideoEventService:
    return VideoEventService(registry, settings)


@events_router.post("/upload", response_model=UploadResult)
async def upload_observed(
    payload: UploadEvent,
    service: VideoEventService = Depends(get_event_service),
):
    video = service.handle_upload(payload)
    return UploadResult(registered=video is not None, video=video)


@events_router.post("/reaction-added", response_model=ReactionResult)
async def reaction_added(
    payload: ReactionEvent,
    service: VideoEventService = Depends(get_event_service),
):
    return ReactionResult(applied=service.handle_reaction_added(payload))


@events_router.post("/reaction-removed", response_model=ReactionResult)
async def reaction_removed(
    payload: ReactionRemovedEvent,
    service: VideoEventService = Depends(get_event_service),
):
    return ReactionResult(applied=service.handle_reaction_removed(payload))
