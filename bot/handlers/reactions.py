from typing import Iterable, Set

from aiogram import Router
from aiogram.types import MessageReactionCountUpdated, MessageReactionUpdated, ReactionTypeEmoji
from loguru import logger

from bot.clients.api_client import APIClient
from bot.core.reaction_cache import ReactionCountCache

router = Router()


def emoji_set(reactions: Iterable) -> Set[str]:
    return {reaction.emoji for reaction in reactions if isinstance(reaction, ReactionTypeEmoji)}


@router.message_reaction()
async def handle_reaction(
    event: MessageReactionUpdated,
    api_client: APIClient,
    reaction_counts: ReactionCountCache,
):
    old = emoji_set(event.old_reaction)
    new = emoji_set(event.new_reaction)
    actor_is_bot = bool(event.user and event.user.is_bot)
    chat_id = event.chat.id

    for emoji in new - old:
        await api_client.report_reaction_added(
            chat_id=chat_id,
            message_id=event.message_id,
            emoji=emoji,
            actor_is_bot=actor_is_bot,
        )

    for emoji in old - new:
        live_count = reaction_counts.get(chat_id, event.message_id, emoji)
        logger.debug(f"Reaction {emoji} removed from {event.message_id}, live count {live_count}")
        await api_client.report_reaction_removed(
            chat_id=chat_id,
            message_id=event.message_id,
            emoji=emoji,
            actor_is_bot=actor_is_bot,
            live_count=live_count,
        )


@router.message_reaction_count()
async def handle_reaction_count(event: MessageReactionCountUpdated, reaction_counts: ReactionCountCache):
    reaction_counts.update(event.chat.id, event.message_id, event.reactions)
