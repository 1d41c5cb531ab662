"""Database models package."""

from pokevault.database.models.base import Base, TimestampMixin
from pokevault.database.models.favorite import Favorite
from pokevault.database.models.pokemon import Pokemon
from pokevault.database.models.species import PokemonSpecies
from pokevault.database.models.type import PokemonType
from pokevault.database.models.user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Cache
    "Pokemon",
    "PokemonSpecies",
    "PokemonType",
    # Users
    "User",
    "Favorite",
]
