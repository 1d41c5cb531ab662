"""Per-update database session middleware."""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, InlineQuery, Message, TelegramObject

from pokevault.database import get_session_context
from pokevault.logging import bind_update_context, get_logger

logger = get_logger(__name__)


def _describe(event: TelegramObject) -> tuple[str, int | None]:
    if isinstance(event, Message):
        kind = "message"
    elif isinstance(event, CallbackQuery):
        kind = "callback"
    elif isinstance(event, InlineQuery):
        kind = "inline"
    else:
        kind = type(event).__name__.lower()
    sender = getattr(event, "from_user", None)
    return kind, sender.id if sender else None


class DatabaseMiddleware(BaseMiddleware):
    """Open one session per update; commit when the handler succeeds.

    Also tags the update's log lines with its kind and sender.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        kind, user_id = _describe(event)
        bind_update_context(update=kind, user_id=user_id)

        try:
            async with get_session_context() as session:
                data["session"] = session
                return await handler(event, data)
        except Exception:
            logger.exception("Update handler failed")
            raise
