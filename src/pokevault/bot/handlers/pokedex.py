"""Pokedex browsing handlers: list, search, filter, detail and inline search."""

from dataclasses import asdict, dataclass, field
from html import escape

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import (
    CallbackQuery,
    InlineQuery,
    InlineQueryResultArticle,
    InputTextMessageContent,
    Message,
)
from aiogram.utils.keyboard import InlineKeyboardBuilder
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.config import settings
from pokevault.core.catalog import (
    PokemonPage,
    get_by_id,
    get_by_name,
    get_types,
    list_pokemon,
    suggest_names,
)
from pokevault.core.favorites import get_favorite_ids
from pokevault.core.generations import GEN_NAMES, MAX_GENERATION
from pokevault.database.models import User
from pokevault.logging import get_logger
from pokevault.utils.debounce import Debouncer
from pokevault.utils.formatting import (
    format_pokemon_card,
    format_pokemon_id,
    format_pokemon_line,
    format_pokemon_name,
    format_types,
)
from pokevault.utils.pagination import page_offset

router = Router(name="pokedex")
logger = get_logger(__name__)

INLINE_RESULTS = 20
MAX_CAPTION_LENGTH = 1024

search_debouncer = Debouncer(settings.search_debounce_seconds)


@dataclass
class DexQuery:
    """Filters parsed from ``/dex`` arguments."""

    search: str | None = None
    types: list[str] = field(default_factory=list)
    generation: int | None = None
    page: int = 1


def parse_dex_args(text: str | None) -> DexQuery:
    """Parse arguments from the dex command.

    Supports:
      /dex pika
      /dex gen:1 type:fire,water
      /dex char page:2
      /dex --gen 3
    """
    query = DexQuery()
    if not text:
        return query

    parts = text.split()
    words = []
    i = 0

    while i < len(parts):
        part = parts[i].lower()

        # Key:value style
        if ":" in part:
            key, _, value = part.partition(":")
            if key in ("gen", "g", "generation") and value.isdigit():
                gen = int(value)
                if 1 <= gen <= MAX_GENERATION:
                    query.generation = gen
            elif key in ("type", "types", "t"):
                query.types.extend(t for t in value.split(",") if t)
            elif key in ("page", "p") and value.isdigit():
                query.page = max(1, int(value))
            else:
                words.append(part)
        # --gen N style
        elif part in ("--gen", "--generation"):
            if i + 1 < len(parts) and parts[i + 1].isdigit():
                gen = int(parts[i + 1])
                if 1 <= gen <= MAX_GENERATION:
                    query.generation = gen
                i += 1
        else:
            words.append(part)

        i += 1

    if words:
        query.search = " ".join(words)

    return query


def describe_filters(query: DexQuery) -> str:
    parts = []
    if query.search:
        parts.append(f'"{escape(query.search)}"')
    if query.generation:
        parts.append(f"Gen {query.generation} ({GEN_NAMES.get(query.generation, '?')})")
    if query.types:
        parts.append(format_types(query.types))
    return ", ".join(parts) or "All Pokemon"


def format_dex_page(page: PokemonPage, query: DexQuery, favorite_ids: set[int]) -> str:
    """Format one page of the Pokedex list."""
    header = f"<b>Pokedex</b> - {describe_filters(query)}\n"
    if not page.items:
        if page.total == 0:
            return header + "\nNo Pokemon found. The cache may be empty; ask an admin to /refresh."
        return header + "\nNo Pokemon on this page."

    lines = [format_pokemon_line(p, p.pokemon_id in favorite_ids) for p in page.items]
    footer = (
        f"\n<i>Showing {page.offset + 1}-{page.offset + len(page.items)} of {page.total}"
        f" | Page {page.page}/{page.total_pages}</i>"
    )
    return header + "\n" + "\n".join(lines) + "\n" + footer


def build_dex_keyboard(page: PokemonPage) -> InlineKeyboardBuilder:
    """Build pagination keyboard for the Pokedex list."""
    builder = InlineKeyboardBuilder()

    if page.has_prev:
        builder.button(text="◀️", callback_data=f"dex:page:{max(page.offset - page.limit, 0)}")
    builder.button(text=f"{page.page}/{page.total_pages}", callback_data="dex:noop")
    if page.has_more:
        builder.button(text="▶️", callback_data=f"dex:page:{page.offset + page.limit}")

    # One detail button per listed Pokemon
    for pokemon in page.items:
        builder.button(
            text=f"{format_pokemon_id(pokemon.pokemon_id)} {format_pokemon_name(pokemon.name)}",
            callback_data=f"poke:show:{pokemon.pokemon_id}",
        )

    nav_count = 1 + int(page.has_prev) + int(page.has_more)
    builder.adjust(nav_count, 2)
    return builder


def build_detail_keyboard(pokemon_id: int, is_favorite: bool) -> InlineKeyboardBuilder:
    builder = InlineKeyboardBuilder()
    text = "★ Unfavorite" if is_favorite else "☆ Favorite"
    builder.button(text=text, callback_data=f"fav:toggle:{pokemon_id}")
    return builder


async def _render_dex(
    session: AsyncSession, user: User | None, query: DexQuery, offset: int
) -> tuple[str, InlineKeyboardBuilder]:
    page = await list_pokemon(
        session,
        limit=settings.default_page_size,
        offset=offset,
        search=query.search,
        types=query.types or None,
        generation=query.generation,
    )
    favorite_ids = await get_favorite_ids(session, user)
    return format_dex_page(page, query, favorite_ids), build_dex_keyboard(page)


@router.message(Command("dex", "pokedex", "search"))
async def cmd_dex(
    message: Message,
    command: CommandObject,
    session: AsyncSession,
    user: User | None,
    state: FSMContext,
) -> None:
    """Handle /dex command."""
    query = parse_dex_args(command.args)
    await state.update_data(dex_query=asdict(query))

    offset = page_offset(query.page, settings.default_page_size)
    text, keyboard = await _render_dex(session, user, query, offset)
    await message.answer(text, reply_markup=keyboard.as_markup())


@router.callback_query(F.data.startswith("dex:"))
async def handle_dex_callback(
    callback: CallbackQuery,
    session: AsyncSession,
    user: User | None,
    state: FSMContext,
) -> None:
    """Handle Pokedex pagination callbacks."""
    data = callback.data.split(":")

    if len(data) < 2 or data[1] == "noop":
        await callback.answer()
        return

    if data[1] == "page" and len(data) > 2 and data[2].isdigit():
        stored = (await state.get_data()).get("dex_query") or {}
        query = DexQuery(**stored)
        text, keyboard = await _render_dex(session, user, query, int(data[2]))
        await callback.message.edit_text(text, reply_markup=keyboard.as_markup())
        await callback.answer()
        return

    await callback.answer("Invalid callback")


async def _send_detail(
    target: Message, session: AsyncSession, user: User | None, pokemon_id: int
) -> bool:
    detail = await get_by_id(session, pokemon_id)
    if detail is None:
        return False

    favorite_ids = await get_favorite_ids(session, user)
    is_favorite = pokemon_id in favorite_ids
    text = format_pokemon_card(detail.pokemon, detail.species, is_favorite)
    keyboard = build_detail_keyboard(pokemon_id, is_favorite).as_markup()

    image = detail.pokemon.sprite_url
    if image and len(text) <= MAX_CAPTION_LENGTH:
        await target.answer_photo(image, caption=text, reply_markup=keyboard)
    else:
        await target.answer(text, reply_markup=keyboard)
    return True


@router.message(Command("pokemon", "info", "p"))
async def cmd_pokemon(
    message: Message,
    command: CommandObject,
    session: AsyncSession,
    user: User | None,
) -> None:
    """Handle /pokemon <id|name> command."""
    arg = (command.args or "").strip().lstrip("#")
    if not arg:
        await message.answer("Usage: /pokemon &lt;number or name&gt;")
        return

    if arg.isdigit():
        if not await _send_detail(message, session, user, int(arg)):
            await message.answer(f"Pokemon {format_pokemon_id(int(arg))} is not cached yet.")
        return

    detail = await get_by_name(session, arg)
    if detail is not None:
        await _send_detail(message, session, user, detail.pokemon.pokemon_id)
        return

    suggestions = await suggest_names(session, arg)
    if suggestions:
        names = ", ".join(format_pokemon_name(n) for n in suggestions)
        await message.answer(f"No Pokemon named <b>{escape(arg)}</b>. Did you mean: {names}?")
    else:
        await message.answer(f"No Pokemon named <b>{escape(arg)}</b>.")


@router.callback_query(F.data.startswith("poke:show:"))
async def handle_show_callback(
    callback: CallbackQuery, session: AsyncSession, user: User | None
) -> None:
    """Open a detail card from a list button."""
    raw_id = callback.data.rsplit(":", 1)[-1]
    if not raw_id.isdigit() or not await _send_detail(callback.message, session, user, int(raw_id)):
        await callback.answer("Pokemon not found")
        return
    await callback.answer()


@router.message(Command("types"))
async def cmd_types(message: Message, session: AsyncSession) -> None:
    """Handle /types command."""
    types = await get_types(session)
    if not types:
        await message.answer("No types cached yet.")
        return

    lines = [f"<code>{t.color}</code> {t.name.capitalize()}" for t in types]
    await message.answer("<b>Pokemon Types</b>\n\n" + "\n".join(lines))


@router.inline_query()
async def handle_inline_search(
    inline_query: InlineQuery, session: AsyncSession
) -> None:
    """Search the catalog from any chat via ``@bot <query>``.

    Telegram sends one update per keystroke; only the last query a user
    typed within the debounce window is answered.
    """
    if not await search_debouncer.settle(inline_query.from_user.id):
        return

    offset = int(inline_query.offset) if inline_query.offset.isdigit() else 0
    query = parse_dex_args(inline_query.query)
    page = await list_pokemon(
        session,
        limit=INLINE_RESULTS,
        offset=offset,
        search=query.search,
        types=query.types or None,
        generation=query.generation,
    )

    results = [
        InlineQueryResultArticle(
            id=str(pokemon.pokemon_id),
            title=f"{format_pokemon_id(pokemon.pokemon_id)} {format_pokemon_name(pokemon.name)}",
            description=format_types(pokemon.types),
            thumbnail_url=pokemon.sprites.get("front_default") if pokemon.sprites else None,
            input_message_content=InputTextMessageContent(
                message_text=format_pokemon_card(pokemon),
            ),
        )
        for pokemon in page.items
    ]

    next_offset = str(page.offset + page.limit) if page.has_more else ""
    await inline_query.answer(results, cache_time=30, is_personal=False, next_offset=next_offset)
