"""Profile handlers."""

from html import escape

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.core.exceptions import PokeVaultError
from pokevault.core.favorites import get_favorite_ids
from pokevault.core.profile import update_profile
from pokevault.database.models import User
from pokevault.logging import get_logger

router = Router(name="profile")
logger = get_logger(__name__)


@router.message(Command("profile"))
async def cmd_profile(message: Message, session: AsyncSession, user: User | None) -> None:
    """Handle /profile command."""
    if user is None:
        await message.answer("Please sign in to view your profile.")
        return

    favorite_count = len(await get_favorite_ids(session, user))
    profile_text = (
        f"<b>Trainer Profile</b>\n\n"
        f"<b>Name:</b> {escape(user.profile_name)}\n"
        f"<b>Favorites:</b> {favorite_count}\n\n"
        f"<i>Member since {user.created_at.strftime('%B %d, %Y')}</i>\n\n"
        f"Change your name with /setname, your picture with /setimage."
    )
    if user.image_url:
        await message.answer_photo(user.image_url, caption=profile_text)
    else:
        await message.answer(profile_text)


@router.message(Command("setname"))
async def cmd_setname(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /setname <name> command."""
    if not command.args:
        await message.answer("Usage: /setname &lt;display name&gt;")
        return

    try:
        user = await update_profile(session, user, name=command.args)
    except PokeVaultError as e:
        await message.answer(f"⚠️ {e}")
        return

    await message.answer(f"Display name set to <b>{escape(user.profile_name)}</b>.")


@router.message(Command("setimage"))
async def cmd_setimage(
    message: Message, command: CommandObject, session: AsyncSession, user: User | None
) -> None:
    """Handle /setimage <url> command."""
    url = (command.args or "").strip()
    if not url.startswith(("http://", "https://")):
        await message.answer("Usage: /setimage &lt;image url&gt;")
        return

    try:
        await update_profile(session, user, image=url)
    except PokeVaultError as e:
        await message.answer(f"⚠️ {e}")
        return

    await message.answer("Profile picture updated.")
