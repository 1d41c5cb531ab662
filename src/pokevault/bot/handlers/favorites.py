"""Favorites handlers."""

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.bot.handlers.pokedex import build_detail_keyboard
from pokevault.core.exceptions import PokeVaultError
from pokevault.core.favorites import (
    add_to_favorites,
    get_favorites,
    remove_from_favorites,
    toggle_favorite,
)
from pokevault.database.models import User
from pokevault.logging import get_logger
from pokevault.utils.formatting import format_pokemon_id, format_pokemon_line

router = Router(name="favorites")
logger = get_logger(__name__)


def _parse_id(args: str | None) -> int | None:
    arg = (args or "").strip().lstrip("#")
    return int(arg) if arg.isdigit() else None


@router.message(Command("fav", "favorite"))
async def cmd_fav(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /fav <id> command."""
    pokemon_id = _parse_id(command.args)
    if pokemon_id is None:
        await message.answer("Usage: /fav &lt;number&gt;")
        return

    try:
        await add_to_favorites(session, user, pokemon_id)
    except PokeVaultError as e:
        await message.answer(f"⚠️ {e}")
        return

    await message.answer(f"Added {format_pokemon_id(pokemon_id)} to favorites.")


@router.message(Command("unfav", "unfavorite"))
async def cmd_unfav(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /unfav <id> command."""
    pokemon_id = _parse_id(command.args)
    if pokemon_id is None:
        await message.answer("Usage: /unfav &lt;number&gt;")
        return

    try:
        await remove_from_favorites(session, user, pokemon_id)
    except PokeVaultError as e:
        await message.answer(f"⚠️ {e}")
        return

    await message.answer(f"Removed {format_pokemon_id(pokemon_id)} from favorites.")


@router.message(Command("favorites", "favs"))
async def cmd_favorites(message: Message, session: AsyncSession, user: User | None) -> None:
    """Handle /favorites command."""
    favorites = await get_favorites(session, user)
    if not favorites:
        await message.answer("You have no favorites yet. Use /fav &lt;number&gt; to add one.")
        return

    lines = [format_pokemon_line(p, is_favorite=True) for p in favorites]
    await message.answer(f"<b>Your Favorites</b> ({len(favorites)})\n\n" + "\n".join(lines))


@router.callback_query(F.data.startswith("fav:toggle:"))
async def handle_fav_toggle(
    callback: CallbackQuery, session: AsyncSession, user: User | None
) -> None:
    """Handle the favorite button on a detail card."""
    raw_id = callback.data.rsplit(":", 1)[-1]
    if not raw_id.isdigit():
        await callback.answer("Invalid callback")
        return

    try:
        now_favorite = await toggle_favorite(session, user, int(raw_id))
    except PokeVaultError as e:
        await callback.answer(str(e), show_alert=True)
        return

    await callback.message.edit_reply_markup(
        reply_markup=build_detail_keyboard(int(raw_id), now_favorite).as_markup()
    )
    await callback.answer("Added to favorites" if now_favorite else "Removed from favorites")
