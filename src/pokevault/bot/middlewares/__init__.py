"""Middleware registration and implementations."""

from aiogram import Dispatcher

from pokevault.bot.middlewares.database import DatabaseMiddleware
from pokevault.bot.middlewares.user import UserMiddleware


def register_all_middlewares(dp: Dispatcher) -> None:
    """Register all middlewares with the dispatcher."""
    # Database session middleware (must be first)
    for observer in (dp.message, dp.callback_query, dp.inline_query):
        observer.middleware(DatabaseMiddleware())

    # User loading middleware (requires database)
    for observer in (dp.message, dp.callback_query, dp.inline_query):
        observer.middleware(UserMiddleware())


__all__ = ["register_all_middlewares", "DatabaseMiddleware", "UserMiddleware"]
