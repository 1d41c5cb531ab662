"""PokeAPI client and the parsed shapes of its documents.

Every payload field is optional: PokeAPI documents are versioned upstream
and sub-fields (sprites, abilities, stats) go missing for some entries.
A field whose value has the wrong shape reads as None, and so does a
malformed element of a list field, so one bad value never rejects the
whole document. These models are an intermediate type only;
``pokevault.core.records`` converts them into strict cache rows before
anything is written.
"""

from typing import Any, TypeVar

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from pokevault.config import settings
from pokevault.core.exceptions import UpstreamError
from pokevault.logging import get_logger

logger = get_logger(__name__)

P = TypeVar("P", bound="Payload")


class Payload(BaseModel):
    """Base for upstream documents: unknown keys ignored, aliases allowed."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _lenient(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            if not isinstance(value, list):
                logger.debug("Dropped malformed PokeAPI field", model=cls.__name__, field=info.field_name)
                return None

        # Keep the good elements of a list; bad ones become None
        try:
            handler([])
        except ValidationError:
            return None
        items = []
        for item in value:
            try:
                items.extend(handler([item]))
            except ValidationError:
                items.append(None)
        logger.debug("Dropped malformed PokeAPI list items", model=cls.__name__, field=info.field_name)
        return items


class NamedResource(Payload):
    name: str | None = None
    url: str | None = None

    @property
    def url_id(self) -> int | None:
        """Trailing numeric id of a resource URL (``.../evolution-chain/1/`` -> 1)."""
        if not self.url:
            return None
        tail = self.url.rstrip("/").rsplit("/", 1)[-1]
        return int(tail) if tail.isdigit() else None


# ------------------------------------------------------------------ #
# /pokemon/{id}
# ------------------------------------------------------------------ #
class TypeSlot(Payload):
    slot: int | None = None
    type: NamedResource | None = None


class AbilitySlot(Payload):
    ability: NamedResource | None = None
    is_hidden: bool | None = None
    slot: int | None = None


class StatEntry(Payload):
    stat: NamedResource | None = None
    base_stat: int | None = None
    effort: int | None = None


class MoveEntry(Payload):
    move: NamedResource | None = None


class SpriteImages(Payload):
    front_default: str | None = None
    front_shiny: str | None = None


class OtherSprites(Payload):
    official_artwork: SpriteImages | None = Field(default=None, alias="official-artwork")


class Sprites(SpriteImages):
    other: OtherSprites | None = None


class PokemonPayload(Payload):
    id: int | None = None
    name: str | None = None
    height: int | None = None
    weight: int | None = None
    base_experience: int | None = None
    types: list[TypeSlot | None] | None = None
    abilities: list[AbilitySlot | None] | None = None
    stats: list[StatEntry | None] | None = None
    moves: list[MoveEntry | None] | None = None
    sprites: Sprites | None = None
    species: NamedResource | None = None


# ------------------------------------------------------------------ #
# /pokemon-species/{id}
# ------------------------------------------------------------------ #
class FlavorTextEntry(Payload):
    flavor_text: str | None = None
    language: NamedResource | None = None


class Genus(Payload):
    genus: str | None = None
    language: NamedResource | None = None


class Variety(Payload):
    is_default: bool | None = None
    pokemon: NamedResource | None = None


class SpeciesPayload(Payload):
    id: int | None = None
    name: str | None = None
    flavor_text_entries: list[FlavorTextEntry | None] | None = None
    genera: list[Genus | None] | None = None
    capture_rate: int | None = None
    base_happiness: int | None = None
    growth_rate: NamedResource | None = None
    habitat: NamedResource | None = None
    evolution_chain: NamedResource | None = None
    generation: NamedResource | None = None
    varieties: list[Variety | None] | None = None


# ------------------------------------------------------------------ #
# /type and /pokedex/{name}
# ------------------------------------------------------------------ #
class TypeListPayload(Payload):
    count: int | None = None
    results: list[NamedResource | None] | None = None


class PokedexEntry(Payload):
    entry_number: int | None = None
    pokemon_species: NamedResource | None = None


class PokedexPayload(Payload):
    id: int | None = None
    name: str | None = None
    pokemon_entries: list[PokedexEntry | None] | None = None


class PokeAPIClient:
    """Thin async wrapper over PokeAPI.

    URLs are always built from ids or names rather than taken from list
    responses.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.pokeapi_base_url).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.http_timeout_seconds,
            headers={"User-Agent": user_agent or settings.http_user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "PokeAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _get(self, url: str, model: type[P], resource: str, identifier: int | str) -> P:
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            raise UpstreamError(resource, identifier, None, str(e)) from e

        if not response.is_success:
            raise UpstreamError(resource, identifier, response.status_code, response.reason_phrase)

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            logger.warning("Unreadable PokeAPI payload", resource=resource, id=identifier, error=str(e))
            raise UpstreamError(resource, identifier, response.status_code, "unreadable payload") from e

    async def get_pokemon(self, id_or_name: int | str) -> PokemonPayload:
        """Fetch ``/pokemon/{id_or_name}``."""
        return await self._get(f"/pokemon/{id_or_name}", PokemonPayload, "pokemon", id_or_name)

    async def get_species(self, id_or_name: int | str) -> SpeciesPayload:
        """Fetch ``/pokemon-species/{id_or_name}``."""
        return await self._get(f"/pokemon-species/{id_or_name}", SpeciesPayload, "species", id_or_name)

    async def get_types(self) -> TypeListPayload:
        """Fetch the full type catalog."""
        return await self._get("/type?limit=100", TypeListPayload, "types", "all")

    async def get_pokedex(self, name: str) -> PokedexPayload:
        """Fetch a regional dex such as ``paldea`` or ``kitakami``."""
        return await self._get(f"/pokedex/{name}", PokedexPayload, "pokedex", name)
