import httpx
import pytest
from fakes import catalog_payload

from pokedex_seeding.catalog import CatalogClient, CatalogPokemon
from pokedex_seeding.errors import CatalogError
from pokedex_seeding.http import RetryPolicy


def test_from_payload_keeps_tracked_stats_and_capitalizes() -> None:
    pokemon = CatalogPokemon.from_payload(catalog_payload(1))

    assert pokemon.pokedex_number == 1
    assert pokemon.name == "Bulbasaur"
    assert (pokemon.hp, pokemon.attack, pokemon.defense, pokemon.speed) == (41, 51, 46, 61)
    assert pokemon.types == ["Fire", "Poison"]


def test_creation_payload_leaves_out_types() -> None:
    pokemon = CatalogPokemon.from_payload(catalog_payload(4))

    assert pokemon.creation_payload() == {
        "pokedexNumber": 4,
        "name": "Charmander",
        "hp": 44,
        "attack": 54,
        "defense": 49,
        "speed": 64,
    }


def test_missing_stats_stay_empty() -> None:
    payload = {"id": 7, "name": "squirtle", "stats": [{"base_stat": 44, "stat": {"name": "hp"}}], "types": []}

    pokemon = CatalogPokemon.from_payload(payload)

    assert pokemon.hp == 44
    assert pokemon.attack is None
    assert pokemon.types == []


def test_fetch_pokemon(catalog: CatalogClient, catalog_service) -> None:
    pokemon = catalog.fetch_pokemon(6)

    assert pokemon.name == "Charizard"
    assert catalog_service.calls == [6]


def test_fetch_pokemon_rejects_error_status(catalog: CatalogClient, catalog_service) -> None:
    catalog_service.failing.add(3)

    with pytest.raises(CatalogError) as excinfo:
        catalog.fetch_pokemon(3)

    assert excinfo.value.number == 3
    assert excinfo.value.status_code == 500


def test_fetch_pokemon_unknown_number(catalog: CatalogClient) -> None:
    with pytest.raises(CatalogError) as excinfo:
        catalog.fetch_pokemon(9999)
    assert excinfo.value.status_code == 404


def test_fetch_pokemon_retries_transport_errors(sleeps) -> None:
    attempts = []

    def flaky(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json=catalog_payload(2))

    with CatalogClient(retry=RetryPolicy(sleep=sleeps.append), transport=httpx.MockTransport(flaky)) as client:
        pokemon = client.fetch_pokemon(2)

    assert pokemon.name == "Ivysaur"
    assert sleeps == [1.0]


@pytest.mark.parametrize("body", [["not", "an", "object"], "missingno"])
def test_fetch_pokemon_rejects_non_object_body(catalog: CatalogClient, catalog_service, body) -> None:
    catalog_service.bodies[2] = body

    with pytest.raises(CatalogError) as excinfo:
        catalog.fetch_pokemon(2)

    assert excinfo.value.number == 2
    assert "non-object" in str(excinfo.value)


def test_malformed_stat_and_type_entries_are_ignored() -> None:
    payload = {
        "id": 25,
        "name": "pikachu",
        "stats": ["hp", {"base_stat": 35, "stat": {"name": "hp"}}, {"base_stat": 90, "stat": "speed"}],
        "types": [None, {"type": {"name": "electric"}}],
    }

    pokemon = CatalogPokemon.from_payload(payload)

    assert pokemon.hp == 35
    assert pokemon.speed is None
    assert pokemon.types == ["Electric"]
