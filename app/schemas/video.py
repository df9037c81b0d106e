from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VideoRecord(BaseModel):
    id: str
    url: str
    filename: str
    uploaded_by: str = Field(..., alias="uploadedBy")
    user_id: str = Field(..., alias="userId")
    timestamp: int
    likes: int = Field(default=0, ge=0)
    dislikes: int = Field(default=0, ge=0)
    file_id: Optional[str] = Field(default=None, alias="fileId")

    model_config = ConfigDict(populate_by_name=True)


class RegistrySnapshot(BaseModel):
    """Persisted unit of the registry: ordered records plus the viewing cursor."""

    videos: List[VideoRecord] = Field(default_factory=list, alias="videoUrls")
    cursor: int = Field(default=0, alias="lastViewedVideoIndex")

    model_config = ConfigDict(populate_by_name=True)


class VideoListResponse(BaseModel):
    status: str = "success"
    count: int
    videos: List[VideoRecord]
    last_viewed_video_index: int = Field(..., alias="lastViewedVideoIndex")

    model_config = ConfigDict(populate_by_name=True)


class VideoReference(BaseModel):
    video_id: Optional[str] = Field(default=None, alias="videoId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("video_id", mode="before")
    @classmethod
    def stringify_video_id(cls, value: Union[str, int, None]) -> Optional[str]:
        # Telegram message ids are numeric; clients may send them either way.
        if value is None or isinstance(value, str):
            return value
        return str(value)


class MarkViewedRequest(VideoReference):
    index: Optional[Any] = None

    @field_validator("index", mode="before")
    @classmethod
    def drop_non_integer_index(cls, value: Any) -> Optional[int]:
        # Anything but a real integer falls through to the videoId lookup.
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None


class MarkViewedResponse(BaseModel):
    status: str = "success"
    message: str
    next_video_index: int = Field(..., alias="nextVideoIndex")

    model_config = ConfigDict(populate_by_name=True)


class BanRequest(VideoReference):
    pass


class StatusResponse(BaseModel):
    status: str
    message: str
