from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from bot.core.config import BotSettings


class APIClient:
    def __init__(self, settings: BotSettings):
        self.settings = settings
        self.base_url = settings.backend_api_url
        self.bot_token = settings.bot_token
        self.client = httpx.AsyncClient(timeout=30.0)

    async def _post_event(self, path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            response = await self.client.post(
                f"{self.base_url}/api/events/{path}",
                json=payload,
                headers={"X-Bot-Token": self.bot_token},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"API error posting {path}: {e.response.status_code} - {e.response.text}")
            return None
        except Exception as e:
            logger.exception(f"Error posting {path}: {e}")
            return None

    async def report_upload(
        self,
        chat_id: int,
        message_id: int,
        author_id: int,
        author_tag: str,
        author_is_bot: bool,
        created_at: str,
        attachments: List[Dict[str, Any]],
    ) -> bool:
        data = await self._post_event("upload", {
            "chat_id": chat_id,
            "message_id": message_id,
            "author_id": author_id,
            "author_tag": author_tag,
            "author_is_bot": author_is_bot,
            "created_at": created_at,
            "attachments": attachments,
        })
        return bool(data and data.get("registered"))

    async def report_reaction_added(
        self, chat_id: int, message_id: int, emoji: str, actor_is_bot: bool
    ) -> bool:
        data = await self._post_event("reaction-added", {
            "chat_id": chat_id,
            "message_id": message_id,
            "emoji": emoji,
            "actor_is_bot": actor_is_bot,
        })
        return bool(data and data.get("applied"))

    async def report_reaction_removed(
        self,
        chat_id: int,
        message_id: int,
        emoji: str,
        actor_is_bot: bool,
        live_count: Optional[int],
    ) -> bool:
        data = await self._post_event("reaction-removed", {
            "chat_id": chat_id,
            "message_id": message_id,
            "emoji": emoji,
            "actor_is_bot": actor_is_bot,
            "live_count": live_count,
        })
        return bool(data and data.get("applied"))

    async def close(self):
        await self.client.aclose()
