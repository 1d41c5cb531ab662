"""Handler registration."""

from aiogram import Dispatcher

from pokevault.bot.handlers import (
    admin,
    favorites,
    pokedex,
    profile,
    start,
)


def register_all_handlers(dp: Dispatcher) -> None:
    """Register all handlers with the dispatcher."""
    # Core handlers
    dp.include_router(start.router)
    dp.include_router(profile.router)

    # Pokedex handlers
    dp.include_router(pokedex.router)
    dp.include_router(favorites.router)

    # Admin handlers
    dp.include_router(admin.router)


__all__ = ["register_all_handlers"]
