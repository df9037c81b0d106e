from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.video import VideoRecord


class Attachment(BaseModel):
    content_type: Optional[str] = None
    file_id: str = Field(..., min_length=1)
    filename: str


class UploadEvent(BaseModel):
    chat_id: int
    message_id: int
    author_id: int
    author_tag: str
    author_is_bot: bool = False
    created_at: datetime
    attachments: List[Attachment] = Field(default_factory=list)


class ReactionEvent(BaseModel):
    chat_id: int
    message_id: int
    emoji: str
    actor_is_bot: bool = False


class ReactionRemovedEvent(ReactionEvent):
    live_count: Optional[int] = Field(default=None, ge=0)


class UploadResult(BaseModel):
    registered: bool
    video: Optional[VideoRecord] = None


class ReactionResult(BaseModel):
    applied: bool
