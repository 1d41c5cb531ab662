"""Pokemon type lookup - display color per type name."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from pokevault.database.models.base import Base


class PokemonType(Base):
    """A type name and the color it is rendered with."""

    __tablename__ = "pokemon_types"

    name: Mapped[str] = mapped_column(String(30), primary_key=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False)

    def __repr__(self) -> str:
        return f"<PokemonType {self.name} {self.color}>"
