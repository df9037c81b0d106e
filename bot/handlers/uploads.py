from typing import Any, Dict, List

from aiogram import Router
from aiogram.types import Message, ReactionTypeEmoji
from loguru import logger

from app.services.event_service import DISLIKE_EMOJI, LIKE_EMOJI
from bot.clients.api_client import APIClient

router = Router()

VIDEO_NOTE_CONTENT_TYPE = "video/mp4"


def extract_attachments(message: Message) -> List[Dict[str, Any]]:
    attachments = []
    for media in (message.video, message.animation, message.document):
        if media is None:
            continue
        attachments.append({
            "content_type": media.mime_type,
            "file_id": media.file_id,
            "filename": media.file_name or f"{media.file_unique_id}.mp4",
        })
    if message.video_note is not None:
        attachments.append({
            "content_type": VIDEO_NOTE_CONTENT_TYPE,
            "file_id": message.video_note.file_id,
            "filename": f"{message.video_note.file_unique_id}.mp4",
        })
    return attachments


def author_tag(message: Message) -> str:
    user = message.from_user
    return f"@{user.username}" if user.username else user.full_name


async def acknowledge(message: Message) -> None:
    # Non-premium bots hold one reaction per message, so the dislike
    # replaces the like and only the last call stays visible.
    for emoji in (LIKE_EMOJI, DISLIKE_EMOJI):
        try:
            await message.react([ReactionTypeEmoji(emoji=emoji)])
        except Exception as e:
            logger.error(f"Error reacting {emoji} to message {message.message_id}: {e}")


@router.message()
async def handle_upload(message: Message, api_client: APIClient):
    if message.from_user is None:
        return

    attachments = extract_attachments(message)
    if not attachments:
        return

    registered = await api_client.report_upload(
        chat_id=message.chat.id,
        message_id=message.message_id,
        author_id=message.from_user.id,
        author_tag=author_tag(message),
        author_is_bot=message.from_user.is_bot,
        created_at=message.date.isoformat(),
        attachments=attachments,
    )

    if registered:
        logger.info(f"Video from {message.from_user.id} registered as {message.message_id}")
        await acknowledge(message)
