"""Telegram bot wiring: bot instance, dispatcher and command menu."""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.base import DefaultKeyBuilder
from aiogram.fsm.storage.redis import RedisStorage
from aiogram.types import BotCommand
from redis.asyncio import Redis

from pokevault.config import settings

BOT_COMMANDS = [
    BotCommand(command="dex", description="Browse and filter the Pokedex"),
    BotCommand(command="pokemon", description="Show one Pokemon by number or name"),
    BotCommand(command="types", description="List Pokemon types"),
    BotCommand(command="favorites", description="Your favorite Pokemon"),
    BotCommand(command="profile", description="Your trainer profile"),
    BotCommand(command="help", description="How to use the bot"),
]


def create_bot() -> Bot:
    """Create the bot with HTML replies and no link previews."""
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is not set")
    return Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(
            parse_mode=ParseMode.HTML,
            link_preview_is_disabled=True,
        ),
    )


async def create_dispatcher() -> Dispatcher:
    """Create the dispatcher, backed by Redis FSM storage."""
    # Redis keeps each chat's /dex filters between page turns
    storage = RedisStorage(
        redis=Redis.from_url(str(settings.redis_url)),
        key_builder=DefaultKeyBuilder(prefix="pokevault"),
    )
    dp = Dispatcher(storage=storage)

    from pokevault.bot.handlers import register_all_handlers
    from pokevault.bot.middlewares import register_all_middlewares

    register_all_handlers(dp)
    register_all_middlewares(dp)
    return dp


async def set_commands(bot: Bot) -> None:
    await bot.set_my_commands(BOT_COMMANDS)


__all__ = ["BOT_COMMANDS", "create_bot", "create_dispatcher", "set_commands"]
