from aiogram import Bot
from aiogram.enums import ChatMemberStatus
from aiogram.exceptions import TelegramAPIError
from loguru import logger

from app.core.config import TelegramSettings
from app.schemas.video import VideoRecord
from app.services.video_registry import VideoRegistry

UNBANNABLE_STATUSES = {ChatMemberStatus.CREATOR, ChatMemberStatus.ADMINISTRATOR}


class ModerationError(Exception):
    pass


class BanDisabledError(ModerationError):
    pass


class GuildNotFoundError(ModerationError):
    pass


class VideoNotFoundError(ModerationError):
    pass


class MemberNotBannableError(ModerationError):
    pass


class ModerationService:
    def __init__(self, bot: Bot, registry: VideoRegistry, settings: TelegramSettings):
        self.bot = bot
        self.registry = registry
        self.settings = settings

    async def ban_uploader(self, video_id: str) -> VideoRecord:
        if not self.settings.ban_enabled:
            raise BanDisabledError("Banning is disabled.")

        guild_id = self.settings.guild_chat_id
        try:
            await self.bot.get_chat(guild_id)
        except TelegramAPIError as e:
            logger.error(f"Guild chat {guild_id} not found: {e}")
            raise GuildNotFoundError("Server not found.") from e

        video = self.registry.find(video_id) if video_id else None
        if video is None:
            logger.warning(f"Ban requested for unknown video {video_id}")
            raise VideoNotFoundError("Video not found.")

        user_id = int(video.user_id)
        member = await self.bot.get_chat_member(guild_id, user_id)
        if member.status in UNBANNABLE_STATUSES:
            raise MemberNotBannableError("User cannot be banned.")

        await self.bot.ban_chat_member(guild_id, user_id)
        logger.info(f"Banned user {video.uploaded_by} ({user_id}) for video {video_id}")
        return video
