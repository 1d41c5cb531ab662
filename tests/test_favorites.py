import pytest
from sqlalchemy import inspect as sa_inspect

from pokevault.core.exceptions import (
    AuthenticationRequiredError,
    FavoriteExistsError,
    FavoriteNotFoundError,
)
from pokevault.core.favorites import (
    add_to_favorites,
    get_favorite_ids,
    get_favorites,
    remove_from_favorites,
    toggle_favorite,
)
from pokevault.database.models import Favorite, User


async def test_add_twice_fails(session, user):
    await add_to_favorites(session, user, 25)

    with pytest.raises(FavoriteExistsError, match="already in favorites"):
        await add_to_favorites(session, user, 25)


async def test_remove_twice_fails(session, user):
    await add_to_favorites(session, user, 25)
    await remove_from_favorites(session, user, 25)

    with pytest.raises(FavoriteNotFoundError, match="not in favorites"):
        await remove_from_favorites(session, user, 25)


async def test_mutations_require_a_user(session):
    with pytest.raises(AuthenticationRequiredError):
        await add_to_favorites(session, None, 25)
    with pytest.raises(AuthenticationRequiredError):
        await remove_from_favorites(session, None, 25)
    with pytest.raises(AuthenticationRequiredError):
        await toggle_favorite(session, None, 25)


async def test_get_favorites_without_user_is_empty(session):
    assert await get_favorites(session, None) == []
    assert await get_favorite_ids(session, None) == set()


async def test_get_favorites_drops_uncached_ids(session, user, add_pokemon):
    await add_pokemon(25, "pikachu")
    await add_pokemon(1, "bulbasaur")
    await add_to_favorites(session, user, 25)
    await add_to_favorites(session, user, 9999)
    await add_to_favorites(session, user, 1)

    favorites = await get_favorites(session, user)

    # Order of favoriting, no placeholders for the missing id
    assert [p.pokemon_id for p in favorites] == [25, 1]
    assert await get_favorite_ids(session, user) == {1, 25, 9999}


async def test_favorites_are_per_user(session, user, add_pokemon):
    other = User(telegram_id=2002, username="misty")
    session.add(other)
    await session.flush()
    await add_pokemon(7, "squirtle")

    await add_to_favorites(session, user, 7)

    assert await get_favorites(session, other) == []
    # The other user can favorite the same Pokemon independently
    await add_to_favorites(session, other, 7)
    assert [p.pokemon_id for p in await get_favorites(session, other)] == [7]


async def test_toggle(session, user):
    assert await toggle_favorite(session, user, 4) is True
    assert await get_favorite_ids(session, user) == {4}
    assert await toggle_favorite(session, user, 4) is False
    assert await get_favorite_ids(session, user) == set()


def test_user_and_favorite_are_linked_by_key_only():
    # Favorites are always queried explicitly; no lazy collections on the models
    assert not sa_inspect(User).relationships
    assert not sa_inspect(Favorite).relationships
