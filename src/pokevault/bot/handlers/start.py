"""Start and help handlers."""

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from pokevault.database.models import User

router = Router(name="start")

WELCOME_MESSAGE = """
<b>Welcome to PokeVault, {name}!</b>

A searchable Pokedex right here on Telegram.

<b>Quick Start:</b>
1. /dex to browse every cached Pokemon
2. /dex char type:fire gen:1 to search and filter
3. /pokemon 25 or /pokemon pikachu for a detail card
4. /fav 25 to keep it in your favorites

You can also search from any chat by typing the bot's username.
Use /help to see all commands.
"""

HELP_MESSAGE = """
<b>Browsing</b>
/dex [text] [gen:N] [type:a,b] [page:N] - list Pokemon
/pokemon &lt;number|name&gt; - detail card
/types - type colors

<b>Favorites</b>
/fav &lt;number&gt; - add a favorite
/unfav &lt;number&gt; - remove a favorite
/favorites - list your favorites

<b>Profile</b>
/profile - show your profile
/setname &lt;name&gt; - change your display name
/setimage &lt;url&gt; - change your picture

<b>Admin</b>
/refresh [limit] [offset] - cache Pokemon from PokeAPI
/refreshdex &lt;dex&gt; [form suffix] - cache a regional dex
"""


@router.message(CommandStart())
async def cmd_start(message: Message, user: User | None) -> None:
    """Handle /start command."""
    name = user.profile_name if user else "Trainer"
    await message.answer(WELCOME_MESSAGE.format(name=name))


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(HELP_MESSAGE)
