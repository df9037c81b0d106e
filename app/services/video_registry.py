from enum import Enum
from typing import List, Optional

from loguru import logger

from app.db.state_store import StateStore
from app.schemas.video import RegistrySnapshot, VideoRecord


class Polarity(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class InvalidSelectorError(ValueError):
    pass


class VideoRegistry:
    """Ordered list of uploaded videos plus the "last viewed" cursor.

    Videos in ``[0, cursor)`` have been reviewed, ``[cursor, len)`` are still
    unseen. Records are appended in arrival order and never re-sorted or
    removed. Every effective mutation rewrites the whole snapshot through the
    store.
    """

    def __init__(self, store: StateStore):
        self.store = store
        self.videos: List[VideoRecord] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.videos)

    def load(self) -> None:
        snapshot = self.store.load()
        if snapshot is None:
            return

        self.videos = list(snapshot.videos)
        cursor = snapshot.cursor
        if cursor < 0 or cursor > len(self.videos):
            logger.warning(f"Persisted cursor {cursor} out of range, clamping to [0, {len(self.videos)}]")
            cursor = min(max(cursor, 0), len(self.videos))
        self.cursor = cursor

    def save(self) -> bool:
        return self.store.save(self.snapshot())

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            videos=[video.model_copy() for video in self.videos],
            cursor=self.cursor,
        )

    def index_of(self, video_id: str) -> int:
        for position, video in enumerate(self.videos):
            if video.id == video_id:
                return position
        return -1

    def find(self, video_id: str) -> Optional[VideoRecord]:
        position = self.index_of(video_id)
        return self.videos[position] if position != -1 else None

    def register(
        self,
        video_id: str,
        url: str,
        filename: str,
        uploaded_by: str,
        user_id: str,
        timestamp: int,
        file_id: Optional[str] = None,
    ) -> Optional[VideoRecord]:
        if self.index_of(video_id) != -1:
            logger.debug(f"Video {video_id} already registered, skipping")
            return None

        video = VideoRecord(
            id=video_id,
            url=url,
            filename=filename,
            uploaded_by=uploaded_by,
            user_id=user_id,
            timestamp=timestamp,
            file_id=file_id,
        )
        self.videos.append(video)
        logger.info(f"Registered video {video_id} ({filename}) from {uploaded_by}")
        self.save()
        return video

    def apply_vote_delta(self, video_id: str, polarity: Polarity) -> bool:
        video = self.find(video_id)
        if video is None:
            return False

        if polarity == Polarity.LIKE:
            video.likes += 1
        else:
            video.dislikes += 1
        logger.debug(f"Video {video_id}: +1 {polarity.value} -> {video.likes}/{video.dislikes}")
        self.save()
        return True

    def reset_vote_to_count(
        self,
        video_id: str,
        polarity: Polarity,
        observed_count: Optional[int],
    ) -> bool:
        """Resynchronize a counter with the platform's live aggregate.

        Local state never sees every reactor, so a removal is not a
        decrement: the counter takes the reported count, or 0 when the
        platform no longer reports that reaction at all.
        """
        video = self.find(video_id)
        if video is None:
            return False

        count = max(observed_count or 0, 0)
        if polarity == Polarity.LIKE:
            video.likes = count
        else:
            video.dislikes = count
        logger.debug(f"Video {video_id}: {polarity.value} reset to {count}")
        self.save()
        return True

    def advance_cursor(self, index: Optional[int] = None, video_id: Optional[str] = None) -> int:
        target = -1
        if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.videos):
            target = index + 1
        elif video_id:
            position = self.index_of(video_id)
            if position != -1:
                target = position + 1

        if target == -1 or target > len(self.videos):
            raise InvalidSelectorError("Invalid video index or ID, or there are no more videos.")

        self.cursor = target
        logger.info(f"Cursor advanced to {self.cursor}/{len(self.videos)}")
        self.save()
        return self.cursor
