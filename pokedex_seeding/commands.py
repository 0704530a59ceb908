from __future__ import annotations

import logging

import httpx

from .builders import create_captures, create_pokemons, create_trainers, create_types, login_as_first_trainer
from .catalog import CatalogClient
from .context import SeedContext
from .errors import SeedingAborted
from .fixtures import TRAINERS
from .http import ApiClient
from .smoke import SmokeSuite
from .teardown import authenticate_for_teardown, delete_everything

logger = logging.getLogger(__name__)

RULE = "=" * 50


def _phase(title: str) -> None:
    print("\n" + RULE)
    print(title)
    print(RULE)


def check_api_access(api: ApiClient) -> bool:
    """Session-less single GET; a 401 still proves the service is up."""
    try:
        probe = api.probe("/pokemons")
    except httpx.TransportError as exc:
        logger.error("Primary service unreachable", extra={"url": api.base_url, "error": str(exc)})
        print(f"⚠️  The API does not seem reachable at {api.base_url}")
        print(f"   Error: {exc}")
        print("   Make sure the application is running")
        return False
    if not probe.ok and probe.status != 401:
        print(f"⚠️  The API does not seem reachable (status: {probe.status})")
        print("   Make sure the application is running")
        return False
    return True


def populate(api: ApiClient, catalog: CatalogClient, ctx: SeedContext) -> None:
    create_trainers(api, ctx)
    if not ctx.trainer_ids:
        print("\n❌ No trainer created, stopping")
        raise SeedingAborted("no trainer could be created or logged in")

    if not login_as_first_trainer(api):
        print("\n❌ Unable to log in, stopping")
        raise SeedingAborted(f"login as {TRAINERS[0].email} failed")

    create_types(api, ctx)
    create_pokemons(api, catalog, ctx)
    create_captures(api, ctx)


def _print_population_summary(api: ApiClient, ctx: SeedContext) -> None:
    print("\n📊 Summary:")
    print(f"   - Trainers: {len(ctx.trainer_ids)}")
    print(f"   - Types: {len(ctx.type_ids)}")
    print(f"   - Pokémon: {len(ctx.pokemon_ids)}")
    print("\n💡 You can now try the API with:")
    first = TRAINERS[0]
    print(
        f"   curl {api.base_url}/auth/login -X POST -H 'Content-Type: application/json' "
        f"-d '{{\"email\":\"{first.email}\",\"password\":\"{first.password}\"}}'"
    )


def run_populate(api: ApiClient, catalog: CatalogClient, ctx: SeedContext) -> int:
    print("🌱 Mode: POPULATE - creating data")
    print(f"   API URL: {api.base_url}\n")
    if not check_api_access(api):
        return 1

    populate(api, catalog, ctx)

    print("\n" + RULE)
    print("✅ Population complete!")
    _print_population_summary(api, ctx)
    return 0


def run_delete(api: ApiClient) -> int:
    print("🗑️  Mode: DELETE - removing all data")
    print(f"   API URL: {api.base_url}\n")
    if not check_api_access(api):
        return 1

    authenticate_for_teardown(api)
    summaries = delete_everything(api)

    print("\n" + RULE)
    print("✅ Deletion complete!\n")
    print("📊 Summary:")
    for summary in summaries:
        print(f"   - {summary.label.capitalize()} deleted: {summary.deleted}")
    return 0


def run_repopulate(api: ApiClient, catalog: CatalogClient, ctx: SeedContext) -> int:
    print("🔄 Mode: REPOPULATE - delete then recreate data")
    print(f"   API URL: {api.base_url}\n")
    if not check_api_access(api):
        return 1

    _phase("📍 PHASE 1: Deleting existing data")
    authenticate_for_teardown(api)
    summaries = delete_everything(api)
    print("\n📊 Deleted:")
    for summary in summaries:
        print(f"   - {summary.label.capitalize()}: {summary.deleted}")

    api.reset_session()
    ctx = ctx.fresh()

    _phase("📍 PHASE 2: Creating fresh data")
    populate(api, catalog, ctx)

    print("\n" + RULE)
    print("✅ Repopulation complete!")
    _print_population_summary(api, ctx)
    return 0


def run_test(api: ApiClient, consumer: ApiClient) -> int:
    print("🧪 Mode: TEST - checking the API")
    print(f"   Primary API URL: {api.base_url}")
    print(f"   Consumer URL: {consumer.base_url}\n")
    if not check_api_access(api):
        return 1

    suite = SmokeSuite(api, consumer)
    return 0 if suite.run() else 1
