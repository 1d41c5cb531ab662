"""Catalog fetcher: pulls Pokemon from PokeAPI into the local cache.

Two variants share the batching machinery:

* :func:`refresh_catalog` caches a contiguous national dex id range. A
  failing id does not cancel its siblings; the batch it belongs to is still
  committed, then the refresh stops with one :class:`CatalogRefreshError`.
* :func:`refresh_regional_dex` caches the entries of one regional dex,
  preferring regional forms. Failing entries are logged and skipped.
"""

import asyncio
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.config import settings
from pokevault.core.constants import DEFAULT_REFRESH_LIMIT, FALLBACK_TYPE_COLOR, TYPE_COLORS
from pokevault.core.exceptions import CatalogRefreshError, UpstreamError
from pokevault.core.generations import PALDEA_FIRST_ID
from pokevault.core.pokeapi import NamedResource, PokeAPIClient, SpeciesPayload
from pokevault.core.records import pokemon_values, species_values, upsert_pokemon
from pokevault.database.models import Pokemon, PokemonType
from pokevault.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Record = tuple[dict[str, Any], dict[str, Any]]


@dataclass
class RefreshResult:
    """Summary of a refresh run.

    ``cached`` counts every id (or dex entry) processed, including ones
    skipped because they were already in the cache.
    """

    cached: int = 0
    fetched: int = 0
    skipped: int = 0
    failed: int = 0
    types: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0


def target_ids(limit: int, offset: int, max_id: int | None = None) -> list[int]:
    """Ids ``offset+1 .. offset+limit``, clipped to the highest known id."""
    max_id = max_id or settings.max_pokemon_id
    if limit <= 0:
        return []
    first = max(offset, 0) + 1
    last = min(offset + limit, max_id)
    return list(range(first, last + 1))


def batch_plan(ids: Sequence[int]) -> tuple[int, float]:
    """Pick (batch size, delay between batches) for a list of ids.

    Ranges entirely inside Paldea get the larger, faster batches.
    """
    if ids and min(ids) >= PALDEA_FIRST_ID:
        return settings.fetch_fast_batch_size, settings.fetch_fast_batch_delay_seconds
    return settings.fetch_batch_size, settings.fetch_batch_delay_seconds


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


async def get_cached_ids(session: AsyncSession, ids: Sequence[int]) -> set[int]:
    """Return the subset of ``ids`` already present in the cache."""
    if not ids:
        return set()
    result = await session.execute(
        select(Pokemon.pokemon_id).where(Pokemon.pokemon_id.in_(list(ids)))
    )
    return set(result.scalars().all())


async def _gather_settled(*coros: Any) -> list[Any]:
    """Run coroutines concurrently, returning results or exceptions in order."""
    outcomes = await asyncio.gather(*coros, return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
            raise outcome
    return outcomes


async def refresh_types(session: AsyncSession, client: PokeAPIClient) -> int:
    """Make sure every upstream type has a color row.

    New types get their local color (or the fallback); existing rows are
    patched only when a local color exists and differs.
    """
    payload = await client.get_types()
    seen = 0

    for resource in payload.results or []:
        if not resource or not resource.name:
            continue
        name = resource.name.lower().strip()
        local_color = TYPE_COLORS.get(name)

        existing = await session.get(PokemonType, name)
        if existing is None:
            session.add(PokemonType(name=name, color=local_color or FALLBACK_TYPE_COLOR))
            await session.flush()
        elif local_color and existing.color != local_color:
            existing.color = local_color
        seen += 1

    await session.flush()
    logger.info("Refreshed type table", types=seen)
    return seen


async def fetch_pokemon_record(client: PokeAPIClient, pokemon_id: int) -> Record:
    """Fetch detail and species for one id, both or neither."""
    pokemon, species = await _gather_settled(
        client.get_pokemon(pokemon_id),
        client.get_species(pokemon_id),
    )
    for outcome in (pokemon, species):
        if isinstance(outcome, Exception):
            raise outcome

    values = pokemon_values(pokemon, pokemon_id)
    return values, species_values(values["pokemon_id"], species)


async def refresh_catalog(
    session: AsyncSession,
    client: PokeAPIClient,
    limit: int = DEFAULT_REFRESH_LIMIT,
    offset: int = 0,
) -> RefreshResult:
    """Ensure cache rows exist for ids ``offset+1 .. offset+limit``.

    Raises:
        CatalogRefreshError: the type catalog or at least one id could not
            be fetched. Batches completed before the failure stay cached.
    """
    ids = target_ids(limit, offset)
    if not ids:
        logger.info("Nothing to refresh", limit=limit, offset=offset)
        return RefreshResult()

    result = RefreshResult(cached=len(ids))

    try:
        result.types = await refresh_types(session, client)
    except UpstreamError as e:
        await session.rollback()
        raise CatalogRefreshError([e]) from e
    await session.commit()

    batch_size, delay = batch_plan(ids)
    batches = list(chunked(ids, batch_size))
    logger.info(
        "Starting catalog refresh",
        first=ids[0],
        last=ids[-1],
        batches=len(batches),
        batch_size=batch_size,
    )

    for index, batch in enumerate(batches, start=1):
        present = await get_cached_ids(session, batch)
        missing = [pokemon_id for pokemon_id in batch if pokemon_id not in present]
        result.skipped += len(present)

        outcomes = await _gather_settled(
            *(fetch_pokemon_record(client, pokemon_id) for pokemon_id in missing)
        )

        failures: list[Exception] = []
        for pokemon_id, outcome in zip(missing, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Failed to fetch Pokemon", pokemon_id=pokemon_id, error=str(outcome))
                failures.append(outcome)
                continue
            await upsert_pokemon(session, *outcome)
            result.fetched += 1

        await session.commit()
        logger.info(
            "Cached batch",
            batch=index,
            of=len(batches),
            fetched=len(missing) - len(failures),
            skipped=len(present),
        )

        if failures:
            result.failed = len(failures)
            raise CatalogRefreshError(failures)

        if index < len(batches) and delay:
            await asyncio.sleep(delay)

    logger.info(
        "Catalog refresh complete",
        cached=result.cached,
        fetched=result.fetched,
        skipped=result.skipped,
    )
    return result


def pick_form(species: SpeciesPayload, suffix: str) -> NamedResource | None:
    """Choose the regional form of a species, else its default form."""
    varieties = [
        variety
        for variety in species.varieties or []
        if variety and variety.pokemon and variety.pokemon.name
    ]
    for variety in varieties:
        if variety.pokemon.name.endswith(f"-{suffix}"):
            return variety.pokemon
    for variety in varieties:
        if variety.is_default:
            return variety.pokemon
    if species.name:
        return NamedResource(name=species.name)
    return None


async def refresh_regional_dex(
    session: AsyncSession,
    client: PokeAPIClient,
    dex_name: str,
    form_suffix: str | None = None,
) -> RefreshResult:
    """Cache every entry of a regional dex, preferring regional forms.

    ``form_suffix`` defaults to the dex name, so ``paldea`` picks
    ``wooper-paldea`` over ``wooper``.
    """
    dex_name = dex_name.lower().strip()
    suffix = (form_suffix or dex_name).lower().strip()

    try:
        dex = await client.get_pokedex(dex_name)
        types = await refresh_types(session, client)
    except UpstreamError as e:
        await session.rollback()
        raise CatalogRefreshError([e]) from e
    await session.commit()

    species_refs = [
        entry.pokemon_species
        for entry in dex.pokemon_entries or []
        if entry and entry.pokemon_species and entry.pokemon_species.name
    ]
    result = RefreshResult(cached=len(species_refs), types=types)
    if not species_refs:
        return result

    batch_size, delay = settings.fetch_batch_size, settings.fetch_batch_delay_seconds
    batches = list(chunked(species_refs, batch_size))
    logger.info("Starting regional dex refresh", dex=dex_name, entries=len(species_refs), batches=len(batches))

    for index, batch in enumerate(batches, start=1):
        species_outcomes = await _gather_settled(
            *(client.get_species(ref.name) for ref in batch)
        )

        # (species payload, chosen form) for every entry that resolved
        resolved: list[tuple[SpeciesPayload, NamedResource]] = []
        for ref, outcome in zip(batch, species_outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Skipping dex entry", species=ref.name, error=str(outcome))
                result.failed += 1
                continue
            form = pick_form(outcome, suffix)
            if form is None:
                logger.warning("Skipping dex entry without forms", species=ref.name)
                result.failed += 1
                continue
            resolved.append((outcome, form))

        present = await get_cached_ids(
            session, [form.url_id for _, form in resolved if form.url_id is not None]
        )
        pending = [(species, form) for species, form in resolved if form.url_id not in present]
        result.skipped += len(resolved) - len(pending)

        form_outcomes = await _gather_settled(
            *(client.get_pokemon(form.name) for _, form in pending)
        )
        for (species, form), outcome in zip(pending, form_outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Skipping dex entry", form=form.name, error=str(outcome))
                result.failed += 1
                continue
            try:
                values = pokemon_values(outcome, form.url_id)
            except ValueError as e:
                logger.warning("Skipping dex entry", form=form.name, error=str(e))
                result.failed += 1
                continue
            await upsert_pokemon(session, values, species_values(values["pokemon_id"], species))
            result.fetched += 1

        await session.commit()
        logger.info("Cached dex batch", dex=dex_name, batch=index, of=len(batches))

        if index < len(batches) and delay:
            await asyncio.sleep(delay)

    logger.info(
        "Regional dex refresh complete",
        dex=dex_name,
        cached=result.cached,
        fetched=result.fetched,
        skipped=result.skipped,
        failed=result.failed,
    )
    return result
