"""End-to-end assertion battery against the primary and consumer services.

Every check prints its own outcome and bumps a counter; a failing check never
stops the run. Empty listings are valid, so per-entry checks only run when
there is an entry to look at.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx

from .fixtures import MISSING_ID, TRAINERS
from .http import ApiClient, ApiResponse

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
COMPARE_SIZE = 3


def _first(items: List[Any]) -> Dict[str, Any]:
    head = items[0] if items else None
    return head if isinstance(head, dict) else {}


def _section(title: str) -> None:
    print(f"\n{title}")
    print("─" * 40)


class SmokeSuite:
    def __init__(self, api: ApiClient, consumer: ApiClient) -> None:
        self.api = api
        self.consumer = consumer
        self.passed = 0
        self.failed = 0
        self.warnings = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def check(self, name: str, condition: bool, details: str = "") -> bool:
        if condition:
            self.passed += 1
            print(f"  ✅ {name}")
        else:
            self.failed += 1
            print(f"  ❌ {name}{f' - {details}' if details else ''}")
        return bool(condition)

    def warn(self, message: str) -> None:
        self.warnings += 1
        logger.warning(message)
        print(f"  ⚠️  {message}")

    def _listing(self, path: str, label: str, require_entries: bool = True) -> ApiResponse:
        result = self.api.get(path)
        self.check(f"GET {path} → 200", result.status == 200, f"got: {result.status}")
        self.check(f"GET {path} returns an array", isinstance(result.data, list))
        if require_entries:
            self.check(f"At least 1 {label} exists", len(result.as_list()) >= 1)
        return result

    def _fetch_by_id(self, path: str, entity_id: Any, label: str) -> None:
        single = self.api.get(f"{path}/{entity_id}")
        self.check(f"GET {path}/{entity_id} → 200", single.status == 200, f"got: {single.status}")
        self.check(f"Fetched {label} has the right ID", single.field("id") == entity_id)

    def check_authentication(self) -> None:
        _section("🔐 Authentication")
        trainer = TRAINERS[0]

        bad = self.api.post("/auth/login", {"email": trainer.email, "password": "wrongpassword"})
        self.check("Login with wrong password → rejected", bad.status in (401, 500), f"got: {bad.status}")
        if bad.status == 500:
            self.warn("Bad credentials were rejected with 500 instead of 401")

        good = self.api.post("/auth/login", trainer.credentials())
        self.check("Login with correct password → 200", good.status == 200, f"got: {good.status}")
        self.check("Login returns trainerId", good.has("trainerId"))
        self.check("Login returns name", good.field("name") == trainer.name)
        self.check("Login returns email", good.field("email") == trainer.email)

        anonymous = self.api.get("/trainers", authenticated=False)
        self.check("Protected access without session → 401", anonymous.status == 401, f"got: {anonymous.status}")

        with_session = self.api.get("/trainers")
        self.check("Protected access with session → 200", with_session.status == 200, f"got: {with_session.status}")

    def check_trainers(self) -> None:
        _section("👤 Trainers")
        listing = self._listing("/trainers", "trainer")

        if listing.as_list():
            first = _first(listing.as_list())
            trainer_id = first.get("id")
            self.check("Trainer has an id", "id" in first)
            self.check("Trainer has a name", "name" in first)
            self.check("Trainer has an email", "email" in first)
            self.check("Trainer does not expose the password", "password" not in first)

            self._fetch_by_id("/trainers", trainer_id, "trainer")

            stats = self.api.get(f"/trainers/{trainer_id}/stats")
            self.check(f"GET /trainers/{trainer_id}/stats → 200", stats.status == 200, f"got: {stats.status}")
            self.check("Stats contain trainerId", stats.field("trainerId") == trainer_id)
            for key in ("totalCaptures", "uniquePokemons", "pokedexCompletionPercentage"):
                self.check(f"Stats contain {key}", stats.has(key))

        missing = self.api.get(f"/trainers/{MISSING_ID}")
        self.check(f"GET /trainers/{MISSING_ID} → 404", missing.status == 404, f"got: {missing.status}")

    def check_pokemons(self) -> None:
        _section("⚡ Pokémon")
        listing = self._listing("/pokemons", "Pokémon")
        pokemons = listing.as_list()

        if pokemons:
            first = _first(pokemons)
            for key in ("id", "name", "pokedexNumber", "hp", "attack", "defense", "speed"):
                self.check(f"Pokémon has {key}", key in first)
            self._fetch_by_id("/pokemons", first.get("id"), "Pokémon")

        missing = self.api.get(f"/pokemons/{MISSING_ID}")
        self.check(f"GET /pokemons/{MISSING_ID} → 404", missing.status == 404, f"got: {missing.status}")

        if len(pokemons) >= COMPARE_SIZE:
            self._check_compare(pokemons[:COMPARE_SIZE])

    def _check_compare(self, picked: List[Dict[str, Any]]) -> None:
        compare = self.api.post("/pokemons/compare", [p.get("id") for p in picked])
        self.check("POST /pokemons/compare → 200", compare.status == 200, f"got: {compare.status}")
        self.check("Compare returns pokemons", isinstance(compare.field("pokemons"), list))
        stats = compare.field("stats")
        self.check("Compare returns stats", compare.has("stats"))
        stats = stats if isinstance(stats, dict) else {}
        for key in ("avgHp", "minAttack", "maxDefense"):
            self.check(f"Stats contain {key}", key in stats)

        hps = [p.get("hp") for p in picked]
        if all(isinstance(hp, (int, float)) for hp in hps) and isinstance(stats.get("avgHp"), (int, float)):
            expected = sum(hps) / len(hps)
            self.check("avgHp is the mean of the compared hp", abs(stats["avgHp"] - expected) < 0.01,
                       f"expected {expected:.2f}, got {stats['avgHp']}")

    def check_types(self) -> None:
        _section("🔴 Types")
        listing = self._listing("/types", "type")
        if listing.as_list():
            first = _first(listing.as_list())
            self.check("Type has an id", "id" in first)
            self.check("Type has a name", "name" in first)
            self._fetch_by_id("/types", first.get("id"), "type")

    def check_captures(self) -> None:
        _section("🎣 Captures")
        listing = self._listing("/caught-pokemons", "capture", require_entries=False)
        if listing.as_list():
            first = _first(listing.as_list())
            self.check("Capture has an id", "id" in first)
            self.check("Capture has a captureDate", "captureDate" in first)
            single = self.api.get(f"/caught-pokemons/{first.get('id')}")
            self.check(f"GET /caught-pokemons/{first.get('id')} → 200", single.status == 200, f"got: {single.status}")

        trainers = self.api.get("/trainers").as_list()
        trainer_id = _first(trainers).get("id")
        if trainers:
            by_trainer = self.api.get(f"/caught-pokemons/trainer/{trainer_id}")
            self.check(f"GET /caught-pokemons/trainer/{trainer_id} → 200", by_trainer.status == 200)
            self.check("Captures by trainer returns an array", isinstance(by_trainer.data, list))

        pokemons = self.api.get("/pokemons").as_list()
        pokemon_id = _first(pokemons).get("id")
        if pokemons:
            by_pokemon = self.api.get(f"/caught-pokemons/pokemon/{pokemon_id}")
            self.check(f"GET /caught-pokemons/pokemon/{pokemon_id} → 200", by_pokemon.status == 200)
            self.check("Captures by Pokémon returns an array", isinstance(by_pokemon.data, list))

        if trainers and pokemons:
            created = self.api.post("/caught-pokemons", {"trainerId": trainer_id, "pokemonId": pokemon_id})
            self.check("POST /caught-pokemons → 201", created.status == 201, f"got: {created.status}")
            self.check("New capture has an id", created.has("id"))
            self.check("New capture has a captureDate", created.has("captureDate"))

    def _consumer_reachable(self) -> bool:
        try:
            probe = self.consumer.probe("/captures")
        except httpx.TransportError as exc:
            logger.info("Consumer probe failed", extra={"url": self.consumer.base_url, "error": str(exc)})
            print(f"  ⚠️  Consumer service unreachable at {self.consumer.base_url}, skipping")
            return False
        if not probe.ok:
            print(f"  ⚠️  Consumer service not available (status: {probe.status}), skipping")
            return False
        return True

    def check_consumer(self) -> None:
        _section(f"📡 Consumer service ({self.consumer.base_url})")
        if not self._consumer_reachable():
            return

        captures = self.consumer.get("/captures")
        self.check("GET /captures → 200", captures.status == 200, f"got: {captures.status}")
        self.check("GET /captures returns an array", isinstance(captures.data, list))
        if captures.as_list():
            first = _first(captures.as_list())
            for key in ("trainerId", "trainerName", "pokemonId", "pokemonName", "captureDate"):
                self.check(f"Consumer capture has {key}", key in first)

        recent = self.consumer.get(f"/captures/recent?limit={RECENT_LIMIT}")
        self.check(f"GET /captures/recent?limit={RECENT_LIMIT} → 200", recent.status == 200, f"got: {recent.status}")
        self.check("Recent captures returns an array", isinstance(recent.data, list))
        self.check(f"Recent captures ≤ {RECENT_LIMIT} entries", len(recent.as_list()) <= RECENT_LIMIT)

        stats = self.consumer.get("/captures/stats")
        self.check("GET /captures/stats → 200", stats.status == 200, f"got: {stats.status}")
        self.check("Stats contain totalMessages", stats.has("totalMessages"))
        self.check("Stats contain maxMessages", stats.has("maxMessages"))

        creations = self.consumer.get("/creations")
        self.check("GET /creations → 200", creations.status == 200, f"got: {creations.status}")
        self.check("GET /creations returns an array", isinstance(creations.data, list))

        aggregated = self.consumer.get("/aggregated/stats")
        self.check("GET /aggregated/stats → 200", aggregated.status == 200, f"got: {aggregated.status}")
        self.check("Aggregated stats returns an array", isinstance(aggregated.data, list))
        if aggregated.as_list():
            first = _first(aggregated.as_list())
            for key in ("trainerId", "trainerName", "totalCaptures"):
                self.check(f"Aggregated stats have {key}", key in first)
            self.check("Aggregated stats have pokemonCounts", isinstance(first.get("pokemonCounts"), list))

            trainer_id = first.get("trainerId")
            by_trainer = self.consumer.get(f"/aggregated/stats/trainer/{trainer_id}")
            self.check(f"GET /aggregated/stats/trainer/{trainer_id} → 200", by_trainer.status == 200)
            self.check("Trainer stats have totalCaptures", by_trainer.has("totalCaptures"))

    def run(self) -> bool:
        self.passed = self.failed = self.warnings = 0
        print("=" * 50)
        print("📍 Starting checks")
        print("=" * 50)

        self.check_authentication()
        self.check_trainers()
        self.check_pokemons()
        self.check_types()
        self.check_captures()
        self.check_consumer()

        print("\n" + "=" * 50)
        print("📊 Check summary")
        print("=" * 50)
        print(f"\n   ✅ Passed: {self.passed}")
        print(f"   ❌ Failed: {self.failed}")
        if self.warnings:
            print(f"   ⚠️  Warnings: {self.warnings}")
        print(f"   📈 Total: {self.total}\n")
        if self.failed:
            print(f"⚠️  {self.failed} check(s) failed")
            return False
        print("🎉 All checks passed!")
        return True
