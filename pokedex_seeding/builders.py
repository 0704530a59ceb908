from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

import httpx

from .catalog import CatalogClient
from .context import SeedContext
from .errors import CatalogError
from .fixtures import CAPTURES_PER_TRAINER, POKEMON_TYPES, TRAINERS
from .http import ApiClient, resolve_created_id

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 20


@dataclass
class StepSummary:
    created: int = 0
    existing: int = 0
    failed: int = 0


def _dump(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, ensure_ascii=False)


def create_trainers(api: ApiClient, ctx: SeedContext) -> StepSummary:
    print("\n📝 Creating trainers...")
    summary = StepSummary()
    for trainer in TRAINERS:
        # Log in first: the trainer may already exist
        login = api.post("/auth/login", trainer.credentials())
        trainer_id = login.field("trainerId")
        if trainer_id:
            ctx.trainer_ids.append(trainer_id)
            summary.existing += 1
            print(f"  ✓ Existing trainer: {trainer.name} (ID: {trainer_id})")
            continue

        registered = api.post("/auth/register", trainer.registration())
        new_id = resolve_created_id(registered.data)
        if new_id:
            ctx.trainer_ids.append(new_id)
            summary.created += 1
            print(f"  ✓ Trainer created: {trainer.name} (ID: {new_id})")
        else:
            summary.failed += 1
            logger.warning("Trainer registration failed", extra={"email": trainer.email, "status_code": registered.status})
            print(f"  ✗ Could not create trainer {trainer.name}: {_dump(registered.data)}")

    print(f"  Total trainers: {len(ctx.trainer_ids)}")
    return summary


def login_as_first_trainer(api: ApiClient) -> bool:
    trainer = TRAINERS[0]
    print("\n🔐 Logging in as the first trainer...")
    result = api.post("/auth/login", trainer.credentials())
    if result.field("trainerId"):
        print(f"  ✓ Logged in as {trainer.name}")
        return True
    print(f"  ✗ Login failed: {_dump(result.data)}")
    return False


def _types_by_name(api: ApiClient) -> Dict[str, Any]:
    listing = api.get("/types")
    return {t.get("name"): t.get("id") for t in listing.as_list() if isinstance(t, dict)}


def create_types(api: ApiClient, ctx: SeedContext) -> StepSummary:
    print("\n🔴 Creating types...")
    summary = StepSummary()
    existing = _types_by_name(api)

    for type_name in POKEMON_TYPES:
        if existing.get(type_name):
            ctx.type_ids[type_name] = existing[type_name]
            summary.existing += 1
            print(f"  ✓ Existing type: {type_name} (ID: {existing[type_name]})")
            continue

        result = api.post("/types", {"name": type_name})
        type_id = result.field("id")
        if type_id:
            ctx.type_ids[type_name] = type_id
            summary.created += 1
            print(f"  ✓ Type created: {type_name} (ID: {type_id})")
            continue

        # Possibly created concurrently or rejected as a duplicate; look it up again
        found = _types_by_name(api).get(type_name)
        if found:
            ctx.type_ids[type_name] = found
            summary.existing += 1
            print(f"  ✓ Existing type (recovered): {type_name} (ID: {found})")
        else:
            summary.failed += 1
            logger.warning("Type not created", extra={"type_name": type_name, "status_code": result.status})
            print(f"  ⚠ Type {type_name} not created")

    print(f"  Total types: {len(ctx.type_ids)}")
    return summary


def create_pokemons(api: ApiClient, catalog: CatalogClient, ctx: SeedContext) -> StepSummary:
    print("\n⚡ Fetching Pokémon from PokeAPI and creating them...")
    print(f"  ({ctx.pokemon_count} Pokémon to process)")
    summary = StepSummary()

    listing = api.get("/pokemons")
    existing = {p.get("pokedexNumber"): p.get("id") for p in listing.as_list() if isinstance(p, dict)}

    for number in range(1, ctx.pokemon_count + 1):
        if existing.get(number):
            ctx.pokemon_ids.append(existing[number])
            summary.existing += 1
            if number % PROGRESS_EVERY == 0:
                print(f"  [{number}/{ctx.pokemon_count}] Progress...")
            continue

        try:
            pokemon = catalog.fetch_pokemon(number)
            ctx.sleep(ctx.catalog_delay)
        except (CatalogError, httpx.HTTPError, KeyError, ValueError) as exc:
            summary.failed += 1
            logger.warning("PokeAPI fetch failed", extra={"pokedex_number": number, "error": str(exc)})
            print(f"  ✗ Could not fetch Pokémon #{number}: {exc}")
            continue

        try:
            result = api.post("/pokemons", pokemon.creation_payload())
        except httpx.TransportError as exc:
            summary.failed += 1
            logger.warning("Pokémon creation failed", extra={"pokedex_number": number, "error": str(exc)})
            print(f"  ✗ Could not create {pokemon.name}: {exc}")
            continue

        pokemon_id = result.field("id")
        if pokemon_id:
            ctx.pokemon_ids.append(pokemon_id)
            summary.created += 1
            if number % PROGRESS_EVERY == 0:
                print(f"  [{number}/{ctx.pokemon_count}] {pokemon.name} created ({'/'.join(pokemon.types)})")
        else:
            summary.failed += 1
            print(f"  ✗ Could not create {pokemon.name}: {_dump(result.data)}")

    print(f"  ✓ Created: {summary.created}, Existing: {summary.existing}, Errors: {summary.failed}")
    print(f"  Total Pokémon available: {len(ctx.pokemon_ids)}")
    return summary


def create_captures(api: ApiClient, ctx: SeedContext) -> int:
    print("\n🎣 Creating captures...")
    if not ctx.pokemon_ids or not ctx.trainer_ids:
        print("  ⚠ No Pokémon or trainers available, cannot create captures")
        return 0

    low, high = CAPTURES_PER_TRAINER
    created = 0
    for trainer_id in ctx.trainer_ids:
        for _ in range(ctx.rng.randint(low, high)):
            pokemon_id = ctx.rng.choice(ctx.pokemon_ids)
            result = api.post("/caught-pokemons", {"trainerId": trainer_id, "pokemonId": pokemon_id})
            if result.field("id"):
                created += 1
            else:
                logger.info(
                    "Capture not created",
                    extra={"trainer_id": trainer_id, "pokemon_id": pokemon_id, "status_code": result.status},
                )

    print(f"  ✓ {created} captures created")
    return created
