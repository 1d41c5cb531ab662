"""Cached species record - flavor and breeding data for a Pokemon."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokevault.database.models.base import Base, TimestampMixin


class PokemonSpecies(Base, TimestampMixin):
    """Species projection, one-to-one with a cached Pokemon by id."""

    __tablename__ = "pokemon_species"

    pokemon_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    flavor_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    genus: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Catch mechanics
    capture_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    base_happiness: Mapped[int | None] = mapped_column(Integer, nullable=True)

    growth_rate: Mapped[str | None] = mapped_column(String(50), nullable=True)
    habitat: Mapped[str | None] = mapped_column(String(50), nullable=True)

    evolution_chain_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    generation: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<PokemonSpecies #{self.pokemon_id} {self.name}>"
