from aiogram import Bot
from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from app.core.config import TelegramSettings, get_telegram_settings
from app.core.telegram import get_bot
from app.db.registry import get_registry
from app.schemas.video import BanRequest, StatusResponse
from app.services.moderation_service import (
    BanDisabledError,
    GuildNotFoundError,
    MemberNotBannableError,
    ModerationService,
    VideoNotFoundError,
)
from app.services.video_registry import VideoRegistry

moderation_router = APIRouter()


def get_moderation_service(
    bot: Bot = Depends(get_bot),
    registry: VideoRegistry = Depends(get_registry),
    settings: TelegramSettings = Depends(get_telegram_settings),
) -> ModerationService:
    return ModerationService(bot, registry, settings)


@moderation_router.post("/ban", response_model=StatusResponse)
async def ban_uploader(
    payload: BanRequest,
    service: ModerationService = Depends(get_moderation_service),
):
    try:
        await service.ban_uploader(payload.video_id)
    except BanDisabledError as e:
        return StatusResponse(status="disabled", message=str(e))
    except (GuildNotFoundError, VideoNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except MemberNotBannableError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except Exception as e:
        logger.exception(f"Error banning uploader of video {payload.video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    return StatusResponse(status="success", message="User banned successfully.")
