# Configuration for the tests.
# Use `pytest` to run them; no PostgreSQL, Redis or network access is needed.

import os

# Must happen before pokevault.config builds its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pokevault.config import settings
from pokevault.core.generations import get_generation_from_id
from pokevault.core.pokeapi import PokeAPIClient
from pokevault.database.models import Base, Pokemon, User

BASE_URL = "https://pokeapi.test/api/v2"


def pokemon_doc(pokemon_id, name, types=("normal",), moves=5, species=None):
    """A trimmed-down /pokemon/{id} document."""
    species = species or name
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "base_experience": 64,
        "types": [
            {"slot": i + 1, "type": {"name": t, "url": f"{BASE_URL}/type/{t}/"}}
            for i, t in enumerate(types)
        ],
        "abilities": [
            {"ability": {"name": "overgrow"}, "is_hidden": False, "slot": 1},
            {"ability": {"name": "chlorophyll"}, "is_hidden": True, "slot": 3},
        ],
        "stats": [
            {"stat": {"name": "hp"}, "base_stat": 45, "effort": 0},
            {"stat": {"name": "attack"}, "base_stat": 49, "effort": 1},
        ],
        "sprites": {
            "front_default": f"https://img.test/{pokemon_id}.png",
            "front_shiny": f"https://img.test/shiny/{pokemon_id}.png",
            "other": {
                "official-artwork": {"front_default": f"https://img.test/art/{pokemon_id}.png"},
            },
        },
        "moves": [{"move": {"name": f"move-{i}"}} for i in range(moves)],
        "species": {"name": species, "url": f"{BASE_URL}/pokemon-species/{species}/"},
    }


def species_doc(species_id, name, varieties=None):
    """A trimmed-down /pokemon-species/{id} document."""
    return {
        "id": species_id,
        "name": name,
        "flavor_text_entries": [
            {"flavor_text": "日本語のテキスト", "language": {"name": "ja"}},
            {"flavor_text": f"A strange\fseed was\nplanted on {name}.", "language": {"name": "en"}},
            {"flavor_text": "A later entry.", "language": {"name": "en"}},
        ],
        "genera": [
            {"genus": "たねポケモン", "language": {"name": "ja"}},
            {"genus": "Seed Pokémon", "language": {"name": "en"}},
        ],
        "capture_rate": 45,
        "base_happiness": 50,
        "growth_rate": {"name": "medium-slow"},
        "habitat": {"name": "grassland"},
        "evolution_chain": {"url": f"{BASE_URL}/evolution-chain/{species_id}/"},
        "generation": {"name": "generation-i"},
        "varieties": varieties
        or [{"is_default": True, "pokemon": {"name": name, "url": f"{BASE_URL}/pokemon/{species_id}/"}}],
    }


class FakePokeAPI:
    """In-memory PokeAPI served through ``httpx.MockTransport``."""

    def __init__(self):
        self.pokemon: dict[str, dict] = {}
        self.species: dict[str, dict] = {}
        self.pokedexes: dict[str, dict] = {}
        self.types = ["normal", "fire", "water", "grass"]
        self.failures: dict[str, int] = {}
        self.requests: list[str] = []

    def add(self, pokemon_id, name, types=("normal",), moves=5):
        self.add_pokemon(pokemon_doc(pokemon_id, name, types, moves))
        self.add_species(species_doc(pokemon_id, name))

    def add_pokemon(self, doc):
        self.pokemon[str(doc["id"])] = doc
        self.pokemon[doc["name"]] = doc

    def add_species(self, doc):
        self.species[str(doc["id"])] = doc
        self.species[doc["name"]] = doc

    def fail(self, path, status=500):
        """Make ``path`` (e.g. ``pokemon-species/3``) answer with ``status``."""
        self.failures[path] = status

    def requested(self, path):
        return path in self.requests

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v2/").strip("/")
        self.requests.append(path)

        if path in self.failures:
            return httpx.Response(self.failures[path], json={"detail": "boom"})

        resource, _, key = path.partition("/")
        if resource == "type" and not key:
            return httpx.Response(
                200,
                json={
                    "count": len(self.types),
                    "results": [{"name": t, "url": f"{BASE_URL}/type/{t}/"} for t in self.types],
                },
            )

        table = {
            "pokemon": self.pokemon,
            "pokemon-species": self.species,
            "pokedex": self.pokedexes,
        }.get(resource, {})
        if key in table:
            return httpx.Response(200, json=table[key])
        return httpx.Response(404, text="Not Found")


@pytest.fixture(autouse=True)
def no_batch_delay(monkeypatch):
    monkeypatch.setattr(settings, "fetch_batch_delay_seconds", 0)
    monkeypatch.setattr(settings, "fetch_fast_batch_delay_seconds", 0)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def fake_api():
    return FakePokeAPI()


@pytest.fixture
async def client(fake_api):
    async with PokeAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_api.handler)) as client:
        yield client


@pytest.fixture
async def user(session):
    user = User(telegram_id=1001, username="ash", first_name="Ash")
    session.add(user)
    await session.flush()
    return user


@pytest.fixture
def add_pokemon(session):
    """Insert cache rows directly, bypassing the fetcher."""

    async def add(pokemon_id, name, types=("normal",), generation=None):
        pokemon = Pokemon(
            pokemon_id=pokemon_id,
            name=name,
            height=10,
            weight=100,
            types=list(types),
            abilities=[],
            stats=[],
            sprites={},
            moves=[],
            generation=get_generation_from_id(pokemon_id) if generation is None else generation,
        )
        session.add(pokemon)
        await session.flush()
        return pokemon

    return add
