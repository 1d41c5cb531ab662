"""Favorite model - a user's bookmarked Pokemon."""

from sqlalchemy import BigInteger, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pokevault.database.models.base import Base, TimestampMixin


class Favorite(Base, TimestampMixin):
    """Pairs a user with a Pokemon id.

    There is no foreign key to ``pokemon``: a favorite can
    outlive the cached record it points at, and readers drop such rows.
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "pokemon_id", name="uq_favorites_user_pokemon"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.telegram_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pokemon_id: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Favorite user={self.user_id} pokemon={self.pokemon_id}>"
