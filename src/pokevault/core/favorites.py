"""Per-user favorites."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pokevault.core.exceptions import (
    AuthenticationRequiredError,
    FavoriteExistsError,
    FavoriteNotFoundError,
)
from pokevault.database.models import Favorite, Pokemon, User
from pokevault.logging import get_logger

logger = get_logger(__name__)


async def _get_favorite(session: AsyncSession, user: User, pokemon_id: int) -> Favorite | None:
    result = await session.execute(
        select(Favorite)
        .where(Favorite.user_id == user.telegram_id)
        .where(Favorite.pokemon_id == pokemon_id)
    )
    return result.scalar_one_or_none()


async def add_to_favorites(session: AsyncSession, user: User | None, pokemon_id: int) -> Favorite:
    """Favorite a Pokemon.

    Raises:
        AuthenticationRequiredError: no user
        FavoriteExistsError: the Pokemon is already a favorite
    """
    if user is None:
        raise AuthenticationRequiredError("Must be authenticated to add favorites")

    if await _get_favorite(session, user, pokemon_id) is not None:
        raise FavoriteExistsError(pokemon_id)

    favorite = Favorite(user_id=user.telegram_id, pokemon_id=pokemon_id)
    session.add(favorite)
    await session.flush()

    logger.info("Added favorite", user_id=user.telegram_id, pokemon_id=pokemon_id)
    return favorite


async def remove_from_favorites(session: AsyncSession, user: User | None, pokemon_id: int) -> None:
    """Un-favorite a Pokemon.

    Raises:
        AuthenticationRequiredError: no user
        FavoriteNotFoundError: the Pokemon is not a favorite
    """
    if user is None:
        raise AuthenticationRequiredError("Must be authenticated to remove favorites")

    favorite = await _get_favorite(session, user, pokemon_id)
    if favorite is None:
        raise FavoriteNotFoundError(pokemon_id)

    await session.delete(favorite)
    await session.flush()

    logger.info("Removed favorite", user_id=user.telegram_id, pokemon_id=pokemon_id)


async def toggle_favorite(session: AsyncSession, user: User | None, pokemon_id: int) -> bool:
    """Flip a favorite on or off. Returns True if it is now a favorite."""
    if user is None:
        raise AuthenticationRequiredError("Please sign in to manage favorites")

    if await _get_favorite(session, user, pokemon_id) is None:
        await add_to_favorites(session, user, pokemon_id)
        return True
    await remove_from_favorites(session, user, pokemon_id)
    return False


async def get_favorites(session: AsyncSession, user: User | None) -> list[Pokemon]:
    """Get the user's favorited Pokemon, in the order they were added.

    Favorites pointing at ids that are not cached are left out.
    """
    if user is None:
        return []

    result = await session.execute(
        select(Pokemon)
        .join(Favorite, Favorite.pokemon_id == Pokemon.pokemon_id)
        .where(Favorite.user_id == user.telegram_id)
        .order_by(Favorite.id)
    )
    return list(result.scalars().unique().all())


async def get_favorite_ids(session: AsyncSession, user: User | None) -> set[int]:
    """Get the ids a user has favorited, cached or not."""
    if user is None:
        return set()

    result = await session.execute(
        select(Favorite.pokemon_id).where(Favorite.user_id == user.telegram_id)
    )
    return set(result.scalars().all())
