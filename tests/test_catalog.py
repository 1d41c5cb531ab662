from pokevault.core.catalog import (
    get_by_id,
    get_by_name,
    get_types,
    list_pokemon,
    suggest_names,
    unique_by_id,
)
from pokevault.database.models import Pokemon, PokemonSpecies, PokemonType


async def seed_catalog(add_pokemon):
    await add_pokemon(1, "bulbasaur", ("grass", "poison"))
    await add_pokemon(4, "charmander", ("fire",))
    await add_pokemon(6, "charizard", ("fire", "flying"))
    await add_pokemon(25, "pikachu", ("electric",))
    await add_pokemon(125, "electabuzz", ("electric",))
    await add_pokemon(155, "cyndaquil", ("fire",))
    await add_pokemon(250, "ho-oh", ("fire", "flying"))
    await add_pokemon(906, "sprigatito", ("grass",))


async def test_list_without_filters_is_sorted_by_id(session, add_pokemon):
    # Inserted out of order on purpose
    await add_pokemon(906, "sprigatito", ("grass",))
    await add_pokemon(4, "charmander", ("fire",))
    await add_pokemon(25, "pikachu", ("electric",))
    await add_pokemon(1, "bulbasaur", ("grass",))

    page = await list_pokemon(session, limit=10)

    assert [p.pokemon_id for p in page.items] == [1, 4, 25, 906]
    assert page.total == 4
    assert page.has_more is False


async def test_pagination_window_and_has_more(session, add_pokemon):
    await seed_catalog(add_pokemon)

    first = await list_pokemon(session, limit=3, offset=0)
    assert [p.pokemon_id for p in first.items] == [1, 4, 6]
    assert first.total == 8
    assert first.has_more is True

    last = await list_pokemon(session, limit=3, offset=6)
    assert [p.pokemon_id for p in last.items] == [250, 906]
    assert last.has_more is False
    assert (last.limit, last.offset) == (3, 6)

    exact = await list_pokemon(session, limit=4, offset=4)
    assert exact.has_more is False

    beyond = await list_pokemon(session, limit=3, offset=50)
    assert beyond.items == []
    assert beyond.total == 8


async def test_default_limit(session, add_pokemon):
    for pokemon_id in range(1, 31):
        await add_pokemon(pokemon_id, f"mon-{pokemon_id}")

    page = await list_pokemon(session)

    assert len(page.items) == 20
    assert page.has_more is True


async def test_search_matches_id_substring(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, search="25")

    assert [p.pokemon_id for p in page.items] == [25, 125, 250]


async def test_search_matches_name_case_insensitively(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, search="CHAR")

    assert [p.name for p in page.items] == ["charmander", "charizard"]
    assert page.total == 2


async def test_type_filter_ignores_case(session, add_pokemon):
    await seed_catalog(add_pokemon)

    lower = await list_pokemon(session, types=["fire"])
    upper = await list_pokemon(session, types=["Fire"])

    assert [p.pokemon_id for p in lower.items] == [4, 6, 155, 250]
    assert [p.pokemon_id for p in upper.items] == [4, 6, 155, 250]


async def test_type_filter_matches_any_requested_type(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, types=["electric", "POISON"])

    assert [p.pokemon_id for p in page.items] == [1, 25, 125]


async def test_generation_filter(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, generation=2)

    assert [p.pokemon_id for p in page.items] == [155, 250]


async def test_generation_falls_back_to_id_range(session, add_pokemon):
    # Rows written before the generation column was populated correctly
    await add_pokemon(1, "bulbasaur", generation=0)
    await add_pokemon(151, "mew", generation=0)
    await add_pokemon(152, "chikorita", generation=0)

    page = await list_pokemon(session, generation=1)

    assert [p.pokemon_id for p in page.items] == [1, 151]


async def test_invalid_generation_scans_everything(session, add_pokemon):
    await seed_catalog(add_pokemon)

    assert (await list_pokemon(session, generation=0)).total == 8
    assert (await list_pokemon(session, generation=None)).total == 8


async def test_unknown_generation_is_empty(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, generation=12)

    assert page.items == []
    assert page.total == 0


async def test_filters_combine(session, add_pokemon):
    await seed_catalog(add_pokemon)

    page = await list_pokemon(session, search="char", types=["flying"], generation=1)

    assert [p.name for p in page.items] == ["charizard"]


def test_unique_by_id_keeps_first_seen():
    first = Pokemon(pokemon_id=1, name="bulbasaur")
    duplicate = Pokemon(pokemon_id=1, name="bulbasaur-copy")
    other = Pokemon(pokemon_id=2, name="ivysaur")

    assert unique_by_id([first, other, duplicate]) == [first, other]


async def test_get_by_id_joins_species(session, add_pokemon):
    await add_pokemon(25, "pikachu", ("electric",))
    session.add(PokemonSpecies(pokemon_id=25, name="pikachu", genus="Mouse Pokémon", generation=1))
    await session.flush()

    detail = await get_by_id(session, 25)

    assert detail.pokemon.name == "pikachu"
    assert detail.species.genus == "Mouse Pokémon"


async def test_get_by_id_without_species(session, add_pokemon):
    await add_pokemon(25, "pikachu")

    detail = await get_by_id(session, 25)

    assert detail.pokemon.pokemon_id == 25
    assert detail.species is None


async def test_get_by_id_missing(session):
    assert await get_by_id(session, 9999) is None


async def test_get_by_name(session, add_pokemon):
    await add_pokemon(122, "mr-mime", ("psychic", "fairy"))

    detail = await get_by_name(session, "Mr Mime")

    assert detail.pokemon.pokemon_id == 122
    assert await get_by_name(session, "missingno") is None


async def test_suggest_names(session, add_pokemon):
    await seed_catalog(add_pokemon)

    suggestions = await suggest_names(session, "pikachoo")

    assert suggestions[0] == "pikachu"


async def test_get_types_sorted(session):
    session.add_all([
        PokemonType(name="water", color="#6890F0"),
        PokemonType(name="fire", color="#F08030"),
    ])
    await session.flush()

    types = await get_types(session)

    assert [(t.name, t.color) for t in types] == [("fire", "#F08030"), ("water", "#6890F0")]
