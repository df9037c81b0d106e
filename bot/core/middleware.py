from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from bot.clients.api_client import APIClient
from bot.core.reaction_cache import ReactionCountCache


class APIClientMiddleware(BaseMiddleware):
    def __init__(self, api_client: APIClient, reaction_counts: ReactionCountCache):
        self.api_client = api_client
        self.reaction_counts = reaction_counts
    
    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any]
    ) -> Any:
        data["api_client"] = self.api_client
        data["reaction_counts"] = self.reaction_counts
        return await handler(event, data)
