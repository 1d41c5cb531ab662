"""User model for trainers."""

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokevault.database.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Represents a Telegram user."""

    __tablename__ = "users"

    # Primary key is Telegram user ID
    telegram_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    # Telegram identity
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Profile customization
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.telegram_id} @{self.username}>"

    @property
    def profile_name(self) -> str:
        """Get display name for user."""
        if self.display_name:
            return self.display_name
        if self.username:
            return f"@{self.username}"
        if self.first_name:
            return self.first_name
        return f"User {self.telegram_id}"
