import httpx
import pytest

from pokedex_seeding.commands import populate
from pokedex_seeding.smoke import SmokeSuite


@pytest.fixture
def populated(api, service, catalog, ctx):
    populate(api, catalog, ctx)
    api.reset_session()
    return service


def test_suite_passes_against_populated_service(populated, api, consumer, capsys) -> None:
    suite = SmokeSuite(api, consumer)

    assert suite.run() is True

    out = capsys.readouterr().out
    assert suite.failed == 0
    assert suite.warnings == 0
    assert suite.passed == suite.total > 60
    assert "avgHp is the mean of the compared hp" in out
    assert "Consumer capture has pokemonName" in out
    assert "🎉 All checks passed!" in out


def test_suite_on_empty_service_does_not_crash(api, consumer, capsys) -> None:
    suite = SmokeSuite(api, consumer)

    assert suite.run() is False

    out = capsys.readouterr().out
    assert "✅ Protected access without session → 401" in out
    assert "✅ Login with wrong password → rejected" in out
    assert suite.failed > 0


def test_unreachable_consumer_is_skipped(populated, api, consumer, consumer_service, capsys) -> None:
    consumer_service.reachable = False
    suite = SmokeSuite(api, consumer)

    assert suite.run() is True

    out = capsys.readouterr().out
    assert "Consumer service unreachable" in out
    assert "GET /captures → 200" not in out


def test_server_error_on_bad_login_is_flagged(populated, api, consumer, service, capsys) -> None:
    service.bad_login_status = 500
    suite = SmokeSuite(api, consumer)

    suite.check_authentication()

    out = capsys.readouterr().out
    assert "✅ Login with wrong password → rejected" in out
    assert suite.warnings == 1
    assert "500 instead of 401" in out


def test_wrong_avg_hp_is_reported(populated, api, consumer, service, monkeypatch, capsys) -> None:
    original = service._pokemons

    def skewed(method, rest, body):
        response = original(method, rest, body)
        if rest == ["compare"]:
            payload = response.json()
            payload["stats"]["avgHp"] += 10
            return httpx.Response(200, json=payload)
        return response

    monkeypatch.setattr(service, "_pokemons", skewed)
    api.post("/auth/login", {"email": "ash@pokemon.com", "password": "password1"})
    suite = SmokeSuite(api, consumer)

    suite.check_pokemons()

    out = capsys.readouterr().out
    assert "❌ avgHp is the mean of the compared hp" in out
    assert suite.failed == 1


def test_check_records_outcome(api, consumer, capsys) -> None:
    suite = SmokeSuite(api, consumer)

    assert suite.check("ok", True) is True
    assert suite.check("broken", False, "got: 500") is False

    out = capsys.readouterr().out
    assert "  ✅ ok" in out
    assert "  ❌ broken - got: 500" in out
    assert (suite.passed, suite.failed, suite.total) == (1, 1, 2)
