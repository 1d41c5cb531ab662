"""Cached Pokemon record - normalized copy of a PokeAPI pokemon document."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pokevault.database.models.base import Base, JSONType, TimestampMixin


class Pokemon(Base, TimestampMixin):
    """A cached Pokemon, written only by the catalog fetcher."""

    __tablename__ = "pokemon"

    # National Pokedex number (or PokeAPI form id for regional forms)
    pokemon_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Physical characteristics
    height: Mapped[int] = mapped_column(Integer, default=0)  # In decimeters
    weight: Mapped[int] = mapped_column(Integer, default=0)  # In hectograms
    base_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Lists of plain names / small objects
    types: Mapped[list] = mapped_column(JSONType, default=list)
    abilities: Mapped[list] = mapped_column(JSONType, default=list)  # [{name, is_hidden}]
    stats: Mapped[list] = mapped_column(JSONType, default=list)  # [{name, base_stat, effort}]
    moves: Mapped[list] = mapped_column(JSONType, default=list)

    # {front_default, front_shiny, official_artwork}
    sprites: Mapped[dict] = mapped_column(JSONType, default=dict)

    generation: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Pokemon #{self.pokemon_id} {self.name}>"

    @property
    def sprite_url(self) -> str | None:
        """Best available image: official artwork, then the default sprite."""
        sprites = self.sprites or {}
        return sprites.get("official_artwork") or sprites.get("front_default")

    @property
    def base_stat_total(self) -> int:
        """Get base stat total."""
        return sum(stat.get("base_stat", 0) for stat in self.stats or [])
