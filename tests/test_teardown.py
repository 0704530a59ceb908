import httpx
import pytest

from pokedex_seeding.commands import populate
from pokedex_seeding.errors import SeedingAborted
from pokedex_seeding.http import ApiClient
from pokedex_seeding.teardown import authenticate_for_teardown, delete_all, delete_everything


def test_authenticate_registers_throwaway_account(api, service) -> None:
    authenticate_for_teardown(api, now_ms=1700000000000)

    emails = [t["email"] for t in service.trainers.values()]
    assert emails == ["temp_delete_1700000000000@pokemon.com"]
    assert api.session_cookie


def test_authenticate_falls_back_to_first_trainer(api, service) -> None:
    service.register_disabled = True
    service.add_trainer("Ash Ketchum", "ash@pokemon.com", "password1")

    authenticate_for_teardown(api)

    assert api.get("/trainers").status == 200


def test_authenticate_aborts_without_any_session(api, service) -> None:
    service.register_disabled = True

    with pytest.raises(SeedingAborted):
        authenticate_for_teardown(api)


def test_delete_everything_empties_the_store(api, service, catalog, ctx) -> None:
    populate(api, catalog, ctx)
    captures = len(service.captures)

    authenticate_for_teardown(api, now_ms=1)
    summaries = delete_everything(api)

    assert [s.label for s in summaries] == ["captures", "Pokémon", "types", "trainers"]
    assert summaries[0].deleted == captures
    assert summaries[1].deleted == ctx.pokemon_count
    assert all(s.failed == 0 for s in summaries)
    assert service.captures == {}
    assert service.pokemons == {}
    assert service.types == {}
    assert service.trainers == {}


def test_delete_all_handles_non_list_listing() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "Unauthorized"}))
    with ApiClient("http://localhost:8080/api", transport=transport) as client:
        summary = delete_all(client, "/types", "types")
    assert (summary.deleted, summary.failed) == (0, 0)


def test_delete_all_counts_rejected_deletes() -> None:
    deleted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": 1}, {"id": 2}, {"id": 3}])
        deleted.append(request.url.path)
        if request.url.path.endswith("/2"):
            return httpx.Response(409, json={"error": "Still referenced"})
        return httpx.Response(200 if request.url.path.endswith("/1") else 204)

    with ApiClient("http://localhost:8080/api", transport=httpx.MockTransport(handler)) as client:
        summary = delete_all(client, "/types", "types")

    assert (summary.deleted, summary.failed) == (2, 1)
    assert deleted == ["/api/types/1", "/api/types/2", "/api/types/3"]


def test_delete_all_skips_records_without_id() -> None:
    deleted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": 1}, {"name": "Ghost"}, "junk"])
        deleted.append(request.url.path)
        return httpx.Response(204)

    with ApiClient("http://localhost:8080/api", transport=httpx.MockTransport(handler)) as client:
        summary = delete_all(client, "/types", "types")

    assert (summary.deleted, summary.failed) == (1, 2)
    assert deleted == ["/api/types/1"]
