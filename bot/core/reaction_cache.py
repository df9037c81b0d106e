from collections import OrderedDict
from typing import Dict, Iterable, Optional, Tuple

from aiogram.types import ReactionCount, ReactionTypeEmoji

MessageKey = Tuple[int, int]


class ReactionCountCache:
    """Latest reaction totals reported by Telegram, per message.

    Fed by ``message_reaction_count`` updates and consulted when a user
    removes a reaction. Only the most recently touched messages are kept.
    """

    def __init__(self, max_messages: int = 1024):
        self.max_messages = max_messages
        self._counts: "OrderedDict[MessageKey, Dict[str, int]]" = OrderedDict()

    def update(self, chat_id: int, message_id: int, reactions: Iterable[ReactionCount]) -> None:
        counts = {
            reaction.type.emoji: reaction.total_count
            for reaction in reactions
            if isinstance(reaction.type, ReactionTypeEmoji)
        }
        key = (chat_id, message_id)
        self._counts[key] = counts
        self._counts.move_to_end(key)
        while len(self._counts) > self.max_messages:
            self._counts.popitem(last=False)

    def get(self, chat_id: int, message_id: int, emoji: str) -> Optional[int]:
        count = self._counts.get((chat_id, message_id), {}).get(emoji)
        return count if count else None

    def __len__(self) -> int:
        return len(self._counts)
