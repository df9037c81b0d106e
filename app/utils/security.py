from typing import Optional

from fastapi import Depends, HTTPException, Header, status
from loguru import logger

from app.core.config import TelegramSettings, get_telegram_settings


async def verify_bot_token(
    x_bot_token: Optional[str] = Header(None, alias="X-Bot-Token"),
    settings: TelegramSettings = Depends(get_telegram_settings),
) -> str:
    if not x_bot_token or x_bot_token != settings.bot_token:
        logger.warning("Rejected event with invalid bot token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid bot token",
        )
    return x_bot_token
