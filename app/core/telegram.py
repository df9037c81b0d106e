from aiogram import Bot
from fastapi import Request

from app.core.config import TelegramSettings


def create_bot(settings: TelegramSettings) -> Bot:
    return Bot(token=settings.bot_token)


def get_bot(request: Request) -> Bot:
    return request.app.state.bot
