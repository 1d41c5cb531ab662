"""Read side of the cache: listing, searching and looking up Pokemon."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz, process
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.config import settings
from pokevault.core.generations import get_generation_range, is_valid_generation
from pokevault.database.models import Pokemon, PokemonSpecies, PokemonType
from pokevault.logging import get_logger
from pokevault.utils.pagination import OffsetPage, paginate_offset

logger = get_logger(__name__)

PokemonPage = OffsetPage[Pokemon]


@dataclass
class PokemonDetail:
    """A cached Pokemon together with its species record, if any."""

    pokemon: Pokemon
    species: PokemonSpecies | None


def unique_by_id(rows: Iterable[Pokemon]) -> list[Pokemon]:
    """Drop repeated ids, keeping the first row seen for each."""
    seen: set[int] = set()
    unique = []
    for row in rows:
        if row.pokemon_id in seen:
            continue
        seen.add(row.pokemon_id)
        unique.append(row)
    return unique


def matches_search(pokemon: Pokemon, search: str) -> bool:
    """Name contains the query (case-insensitive) or the id string does."""
    query = search.lower()
    return query in pokemon.name.lower() or query in str(pokemon.pokemon_id)


def matches_types(pokemon: Pokemon, types: Sequence[str]) -> bool:
    """Any requested type appears among the Pokemon's types."""
    wanted = {t.lower() for t in types}
    return any(t.lower() in wanted for t in pokemon.types or [])


async def _load_generation(session: AsyncSession, generation: int) -> list[Pokemon]:
    result = await session.execute(select(Pokemon).where(Pokemon.generation == generation))
    rows = list(result.scalars().all())
    if rows:
        return rows

    # Rows cached before the generation column was filled correctly
    id_range = get_generation_range(generation)
    if id_range is None:
        return []
    first, last = id_range
    result = await session.execute(
        select(Pokemon).where(Pokemon.pokemon_id >= first, Pokemon.pokemon_id <= last)
    )
    rows = list(result.scalars().all())
    if rows:
        logger.debug("Generation index empty, used id range", generation=generation, rows=len(rows))
    return rows


async def list_pokemon(
    session: AsyncSession,
    limit: int | None = None,
    offset: int = 0,
    search: str | None = None,
    types: Sequence[str] | None = None,
    generation: int | None = None,
) -> PokemonPage:
    """Get one page of cached Pokemon.

    Filters apply in order: generation, de-duplication, search, types.
    The survivors are sorted by id and sliced to ``[offset, offset+limit)``.

    Args:
        session: Database session
        limit: Page size (defaults to ``settings.default_page_size``)
        offset: Number of matching Pokemon to skip
        search: Substring of the name, or of the id written as a number
        types: Keep Pokemon having any of these types
        generation: Keep Pokemon from this generation

    Returns:
        PokemonPage whose ``total`` is the filtered count before slicing
    """
    if limit is None:
        limit = settings.default_page_size

    if is_valid_generation(generation):
        rows = await _load_generation(session, generation)
    else:
        result = await session.execute(select(Pokemon))
        rows = list(result.scalars().all())

    rows = unique_by_id(rows)

    if search:
        rows = [p for p in rows if matches_search(p, search)]

    if types:
        rows = [p for p in rows if matches_types(p, types)]

    rows.sort(key=lambda p: p.pokemon_id)

    return paginate_offset(rows, limit, offset)


async def get_by_id(session: AsyncSession, pokemon_id: int) -> PokemonDetail | None:
    """Get a cached Pokemon and its species, or None when not cached."""
    result = await session.execute(
        select(Pokemon).where(Pokemon.pokemon_id == pokemon_id).limit(1)
    )
    pokemon = result.scalars().first()
    if pokemon is None:
        return None

    result = await session.execute(
        select(PokemonSpecies).where(PokemonSpecies.pokemon_id == pokemon_id).limit(1)
    )
    return PokemonDetail(pokemon=pokemon, species=result.scalars().first())


async def get_by_name(session: AsyncSession, name: str) -> PokemonDetail | None:
    """Look a Pokemon up by its exact (case-insensitive) name."""
    normalized = name.strip().lower().replace(" ", "-")
    result = await session.execute(
        select(Pokemon.pokemon_id).where(Pokemon.name == normalized).order_by(Pokemon.pokemon_id).limit(1)
    )
    pokemon_id = result.scalars().first()
    if pokemon_id is None:
        return None
    return await get_by_id(session, pokemon_id)


async def suggest_names(session: AsyncSession, query: str, limit: int = 3) -> list[str]:
    """Closest cached names to a misspelled query."""
    result = await session.execute(select(Pokemon.name))
    names = list(set(result.scalars().all()))
    if not names:
        return []
    matches = process.extract(
        query.strip().lower(),
        names,
        scorer=fuzz.WRatio,
        limit=limit,
        score_cutoff=60,
    )
    return [name for name, _score, _index in matches]


async def get_types(session: AsyncSession) -> list[PokemonType]:
    """Get every cached type with its display color."""
    result = await session.execute(select(PokemonType).order_by(PokemonType.name))
    return list(result.scalars().all())
