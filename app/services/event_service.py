from typing import Optional

from loguru import logger

from app.core.config import TelegramSettings
from app.schemas.events import Attachment, ReactionEvent, ReactionRemovedEvent, UploadEvent
from app.schemas.video import VideoRecord
from app.services.video_registry import Polarity, VideoRegistry

LIKE_EMOJI = "👍"
DISLIKE_EMOJI = "👎"

EMOJI_POLARITY = {
    LIKE_EMOJI: Polarity.LIKE,
    DISLIKE_EMOJI: Polarity.DISLIKE,
}


def video_file_url(video_id: str) -> str:
    return f"/api/videos/{video_id}/file"


class VideoEventService:
    def __init__(self, registry: VideoRegistry, settings: TelegramSettings):
        self.registry = registry
        self.settings = settings

    def _is_monitored(self, chat_id: int, is_bot: bool) -> bool:
        return not is_bot and chat_id == self.settings.monitored_chat_id

    @staticmethod
    def first_video_attachment(event: UploadEvent) -> Optional[Attachment]:
        for attachment in event.attachments:
            if attachment.content_type and attachment.content_type.startswith("video/"):
                return attachment
        return None

    def handle_upload(self, event: UploadEvent) -> Optional[VideoRecord]:
        if not self._is_monitored(event.chat_id, event.author_is_bot):
            return None

        attachment = self.first_video_attachment(event)
        if attachment is None:
            return None

        video_id = str(event.message_id)
        return self.registry.register(
            video_id=video_id,
            url=video_file_url(video_id),
            filename=attachment.filename,
            uploaded_by=event.author_tag,
            user_id=str(event.author_id),
            timestamp=int(event.created_at.timestamp() * 1000),
            file_id=attachment.file_id,
        )

    def _polarity_for(self, event: ReactionEvent) -> Optional[Polarity]:
        if not self._is_monitored(event.chat_id, event.actor_is_bot):
            return None
        return EMOJI_POLARITY.get(event.emoji)

    def handle_reaction_added(self, event: ReactionEvent) -> bool:
        polarity = self._polarity_for(event)
        if polarity is None:
            return False
        return self.registry.apply_vote_delta(str(event.message_id), polarity)

    def handle_reaction_removed(self, event: ReactionRemovedEvent) -> bool:
        polarity = self._polarity_for(event)
        if polarity is None:
            return False
        logger.debug(f"Reaction {event.emoji} removed from {event.message_id}, live count {event.live_count}")
        return self.registry.reset_vote_to_count(str(event.message_id), polarity, event.live_count)
