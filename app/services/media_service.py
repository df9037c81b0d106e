import mimetypes
from io import BytesIO
from typing import Tuple

from aiogram import Bot
from loguru import logger

from app.schemas.video import VideoRecord

DEFAULT_MEDIA_TYPE = "video/mp4"


class MediaService:
    def __init__(self, bot: Bot):
        self.bot = bot

    async def download(self, video: VideoRecord) -> Tuple[bytes, str]:
        if not video.file_id:
            raise FileNotFoundError(f"Video {video.id} has no stored file")

        file = await self.bot.get_file(video.file_id)
        buffer = BytesIO()
        await self.bot.download_file(file.file_path, destination=buffer)
        logger.debug(f"Downloaded {file.file_path} for video {video.id}")

        media_type = mimetypes.guess_type(video.filename)[0] or DEFAULT_MEDIA_TYPE
        return buffer.getvalue(), media_type
