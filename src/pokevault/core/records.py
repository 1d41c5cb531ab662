"""Conversion of PokeAPI payloads into cache rows, and the cache upsert."""

from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.core.constants import MAX_MOVES_CACHED, PREFERRED_LANGUAGE
from pokevault.core.generations import get_generation_from_id
from pokevault.core.pokeapi import PokemonPayload, SpeciesPayload
from pokevault.database.models import Base, Pokemon, PokemonSpecies


def clean_text(raw: str) -> str:
    """Clean PokeAPI flavor text (remove control chars, collapse whitespace)."""
    return " ".join(raw.replace("\f", " ").split())


def pokemon_values(payload: PokemonPayload, pokemon_id: int | None = None) -> dict[str, Any]:
    """Build the column values of a :class:`Pokemon` row from a payload.

    Missing pieces become empty values rather than failing the fetch, so a
    sparse upstream document still produces a (partially populated) row.
    ``pokemon_id`` is used only when the payload carries no id of its own.
    """
    if payload.id is not None:
        pokemon_id = payload.id
    if pokemon_id is None:
        raise ValueError("Pokemon payload has no id")

    types = [
        slot.type.name
        for slot in payload.types or []
        if slot and slot.type and slot.type.name
    ]
    abilities = [
        {
            "name": (slot.ability.name if slot.ability else None) or "",
            "is_hidden": bool(slot.is_hidden),
        }
        for slot in payload.abilities or []
        if slot
    ]
    stats = [
        {
            "name": (entry.stat.name if entry.stat else None) or "",
            "base_stat": entry.base_stat or 0,
            "effort": entry.effort or 0,
        }
        for entry in payload.stats or []
        if entry
    ]
    moves = [
        entry.move.name
        for entry in (payload.moves or [])[:MAX_MOVES_CACHED]
        if entry and entry.move and entry.move.name
    ]

    sprites = payload.sprites
    artwork = sprites.other.official_artwork if sprites and sprites.other else None

    return {
        "pokemon_id": pokemon_id,
        "name": payload.name or "",
        "height": payload.height or 0,
        "weight": payload.weight or 0,
        "base_experience": payload.base_experience,
        "types": types,
        "abilities": abilities,
        "stats": stats,
        "sprites": {
            "front_default": sprites.front_default if sprites else None,
            "front_shiny": sprites.front_shiny if sprites else None,
            "official_artwork": artwork.front_default if artwork else None,
        },
        "moves": moves,
        "generation": get_generation_from_id(pokemon_id),
    }


def species_values(pokemon_id: int, payload: SpeciesPayload) -> dict[str, Any]:
    """Build the column values of a :class:`PokemonSpecies` row."""
    flavor_text = None
    for entry in payload.flavor_text_entries or []:
        if entry and entry.language and entry.language.name == PREFERRED_LANGUAGE:
            if entry.flavor_text:
                flavor_text = clean_text(entry.flavor_text)
            break

    genus = None
    for entry in payload.genera or []:
        if entry and entry.language and entry.language.name == PREFERRED_LANGUAGE:
            genus = entry.genus
            break

    return {
        "pokemon_id": pokemon_id,
        "name": payload.name or "",
        "flavor_text": flavor_text,
        "genus": genus,
        "capture_rate": payload.capture_rate,
        "base_happiness": payload.base_happiness,
        "growth_rate": payload.growth_rate.name if payload.growth_rate else None,
        "habitat": payload.habitat.name if payload.habitat else None,
        "evolution_chain_id": payload.evolution_chain.url_id if payload.evolution_chain else None,
        "generation": get_generation_from_id(pokemon_id),
    }


async def _upsert(session: AsyncSession, model: type[Base], values: dict[str, Any], key: str) -> None:
    """INSERT ... ON CONFLICT (key) DO UPDATE for the session's dialect."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        insert = pg_insert
    elif dialect == "sqlite":
        insert = sqlite_insert
    else:
        await session.merge(model(**values))
        return

    stmt = insert(model).values(**values)
    update = {k: v for k, v in values.items() if k != key}
    update["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=[key], set_=update)
    await session.execute(stmt)


async def upsert_pokemon(
    session: AsyncSession,
    pokemon: dict[str, Any],
    species: dict[str, Any],
) -> None:
    """Write a Pokemon and its species as one unit, patching existing rows."""
    await _upsert(session, Pokemon, pokemon, "pokemon_id")
    await _upsert(session, PokemonSpecies, species, "pokemon_id")
