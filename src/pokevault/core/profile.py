"""Profile customization."""

from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.core.exceptions import AuthenticationRequiredError
from pokevault.database.models import User
from pokevault.logging import get_logger

logger = get_logger(__name__)

MAX_DISPLAY_NAME_LENGTH = 64


async def update_profile(
    session: AsyncSession,
    user: User | None,
    name: str | None = None,
    image: str | None = None,
) -> User:
    """Update the user's display name and/or image.

    Fields left as None are untouched; with neither given this is a no-op.
    """
    if user is None:
        raise AuthenticationRequiredError("Not authenticated")

    if name is None and image is None:
        return user

    if name is not None:
        user.display_name = name.strip()[:MAX_DISPLAY_NAME_LENGTH] or None
    if image is not None:
        user.image_url = image.strip() or None

    await session.flush()
    logger.info("Updated profile", user_id=user.telegram_id, name=name is not None, image=image is not None)
    return user
