from fastapi import APIRouter
from app.api import events, moderation, videos

api_router = APIRouter(prefix="/api")

api_router.include_router(videos.videos_router, prefix="/videos", tags=["videos"])
api_router.include_router(moderation.moderation_router, tags=["moderation"])
api_router.include_router(events.events_router, prefix="/events", tags=["events"])

__all__ = ["api_router"]
