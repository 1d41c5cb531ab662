import httpx
import pytest
from conftest import BASE_URL, pokemon_doc, species_doc

from pokevault.core.exceptions import UpstreamError
from pokevault.core.pokeapi import NamedResource, PokeAPIClient, PokemonPayload, SpeciesPayload


async def test_get_pokemon_by_constructed_url(fake_api, client):
    fake_api.add(25, "pikachu", ("electric",))

    payload = await client.get_pokemon(25)

    assert payload.id == 25
    assert payload.name == "pikachu"
    assert fake_api.requested("pokemon/25")


async def test_not_found_raises_upstream_error(client):
    with pytest.raises(UpstreamError) as excinfo:
        await client.get_species(99999)

    assert excinfo.value.status == 404
    assert excinfo.value.identifier == 99999
    assert "id 99999" in str(excinfo.value)
    assert "404" in str(excinfo.value)


async def test_server_error_raises_upstream_error(fake_api, client):
    fake_api.fail("type", 503)

    with pytest.raises(UpstreamError) as excinfo:
        await client.get_types()

    assert excinfo.value.status == 503


async def test_unreadable_body_raises_upstream_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    async with PokeAPIClient(base_url=BASE_URL, transport=transport) as client:
        with pytest.raises(UpstreamError, match="unreadable payload"):
            await client.get_pokemon(1)


async def test_transport_error_raises_upstream_error():
    def explode(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with PokeAPIClient(base_url=BASE_URL, transport=httpx.MockTransport(explode)) as client:
        with pytest.raises(UpstreamError) as excinfo:
            await client.get_pokemon(1)

    assert excinfo.value.status is None


async def test_type_list(client):
    payload = await client.get_types()
    assert [t.name for t in payload.results] == ["normal", "fire", "water", "grass"]


def test_named_resource_url_id():
    assert NamedResource(url="https://pokeapi.co/api/v2/evolution-chain/67/").url_id == 67
    assert NamedResource(url="https://pokeapi.co/api/v2/pokemon/10253").url_id == 10253
    assert NamedResource(url="https://pokeapi.co/api/v2/pokemon/abc/").url_id is None
    assert NamedResource(name="x").url_id is None


def test_malformed_field_reads_as_none():
    doc = pokemon_doc(1, "bulbasaur", ("grass", "poison"))
    doc["base_experience"] = "unknown"
    doc["height"] = {"value": 7}
    doc["sprites"]["other"] = "none"

    payload = PokemonPayload.model_validate(doc)

    assert payload.base_experience is None
    assert payload.height is None
    assert payload.sprites.other is None
    # Untouched fields still parse
    assert payload.weight == 69
    assert payload.sprites.front_default == "https://img.test/1.png"


def test_malformed_list_element_reads_as_none():
    doc = pokemon_doc(1, "bulbasaur", ("grass", "poison"))
    doc["types"].insert(1, "bogus")
    doc["stats"][0]["base_stat"] = "lots"
    doc["moves"] = "not-a-list"

    payload = PokemonPayload.model_validate(doc)

    assert [slot.type.name if slot else None for slot in payload.types] == ["grass", None, "poison"]
    assert payload.stats[0].base_stat is None
    assert payload.stats[1].base_stat == 49
    assert payload.moves is None


def test_malformed_nested_resource_reads_as_none():
    doc = species_doc(1, "bulbasaur")
    doc["habitat"] = "grassland"
    doc["capture_rate"] = "high"
    doc["name"] = ["bulbasaur"]

    payload = SpeciesPayload.model_validate(doc)

    assert payload.habitat is None
    assert payload.capture_rate is None
    assert payload.name is None
    assert payload.growth_rate.name == "medium-slow"
