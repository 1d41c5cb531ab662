"""Admin handlers: refreshing the cache from PokeAPI."""

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.config import settings
from pokevault.core.constants import DEFAULT_REFRESH_LIMIT
from pokevault.core.exceptions import CatalogRefreshError
from pokevault.core.fetcher import RefreshResult, refresh_catalog, refresh_regional_dex
from pokevault.core.pokeapi import PokeAPIClient
from pokevault.database.models import User
from pokevault.logging import get_logger

router = Router(name="admin")
logger = get_logger(__name__)


def is_admin(user: User | None) -> bool:
    return user is not None and user.telegram_id in settings.admin_ids


def parse_refresh_args(text: str | None) -> tuple[int, int]:
    """Parse ``[limit] [offset]``, defaulting to the first generation."""
    numbers = [int(p) for p in (text or "").split() if p.isdigit()]
    limit = numbers[0] if numbers else DEFAULT_REFRESH_LIMIT
    offset = numbers[1] if len(numbers) > 1 else 0
    return limit, offset


def format_refresh_result(result: RefreshResult) -> str:
    text = (
        f"<b>Refresh complete</b>\n\n"
        f"Processed: {result.cached}\n"
        f"Fetched: {result.fetched}\n"
        f"Already cached: {result.skipped}\n"
        f"Types: {result.types}"
    )
    if result.failed:
        text += f"\nSkipped after errors: {result.failed}"
    return text


@router.message(Command("refresh"))
async def cmd_refresh(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /refresh [limit] [offset] command."""
    if not is_admin(user):
        await message.answer("Only admins can refresh the Pokedex.")
        return

    limit, offset = parse_refresh_args(command.args)
    status = await message.answer(f"Refreshing Pokemon {offset + 1}-{offset + limit}...")

    try:
        async with PokeAPIClient() as client:
            result = await refresh_catalog(session, client, limit=limit, offset=offset)
    except CatalogRefreshError as e:
        logger.error("Refresh failed", user_id=user.telegram_id, error=str(e))
        await status.edit_text(f"⚠️ {e}\n\nYou can run /refresh again to retry.")
        return

    logger.info("Refresh finished", user_id=user.telegram_id, cached=result.cached)
    await status.edit_text(format_refresh_result(result))


@router.message(Command("refreshdex"))
async def cmd_refresh_dex(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /refreshdex <dex> [suffix] command."""
    if not is_admin(user):
        await message.answer("Only admins can refresh the Pokedex.")
        return

    parts = (command.args or "").split()
    if not parts:
        await message.answer("Usage: /refreshdex &lt;dex name&gt; [form suffix]")
        return

    dex_name = parts[0]
    suffix = parts[1] if len(parts) > 1 else None
    status = await message.answer(f"Refreshing the {dex_name} dex...")

    try:
        async with PokeAPIClient() as client:
            result = await refresh_regional_dex(session, client, dex_name, suffix)
    except CatalogRefreshError as e:
        logger.error("Regional refresh failed", dex=dex_name, error=str(e))
        await status.edit_text(f"⚠️ {e}\n\nYou can run /refreshdex again to retry.")
        return

    await status.edit_text(format_refresh_result(result))
