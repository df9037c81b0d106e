from fastapi import Request

from app.core.config import AppSettings
from app.db.state_store import StateStore
from app.services.video_registry import VideoRegistry


def create_registry(settings: AppSettings) -> VideoRegistry:
    registry = VideoRegistry(StateStore(settings.state_file))
    registry.load()
    return registry


def get_registry(request: Request) -> VideoRegistry:
    return request.app.state.registry
