import asyncio
import sys
from contextlib import asynccontextmanager

from aiogram import Bot, Dispatcher
from loguru import logger

from bot.clients.api_client import APIClient
from bot.core.config import BotSettings
from bot.core.middleware import APIClientMiddleware
from bot.core.reaction_cache import ReactionCountCache
from bot.handlers import reactions, uploads


async def setup_logging():
    logger.add(
        "logs/bot.log",
        rotation="1 day",
        compression="gz",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
    )


@asynccontextmanager
async def lifespan(bot: Bot, api_client: APIClient):
    logger.info("Bot starting...")
    yield
    logger.info("Bot shutting down...")
    await api_client.close()
    await bot.session.close()


def create_dispatcher(api_client: APIClient, reaction_counts: ReactionCountCache) -> Dispatcher:
    dp = Dispatcher()
    middleware = APIClientMiddleware(api_client, reaction_counts)
    dp.message.middleware(middleware)
    dp.message_reaction.middleware(middleware)
    dp.message_reaction_count.middleware(middleware)
    dp.include_router(uploads.router)
    dp.include_router(reactions.router)
    return dp


async def main():
    await setup_logging()
    
    settings = BotSettings()
    
    bot = Bot(token=settings.bot_token)
    
    api_client = APIClient(settings)
    dp = create_dispatcher(api_client, ReactionCountCache(settings.reaction_cache_size))
    
    async with lifespan(bot, api_client):
        logger.info("Bot is running...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)
