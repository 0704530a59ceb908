from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import httpx

from .catalog import CatalogClient
from .commands import run_delete, run_populate, run_repopulate, run_test
from .context import SeedContext
from .errors import SeedingAborted
from .fixtures import (
    DEFAULT_API_URL,
    DEFAULT_CATALOG_DELAY,
    DEFAULT_CATALOG_URL,
    DEFAULT_CONSUMER_URL,
    DEFAULT_POKEMON_COUNT,
)
from .http import ApiClient, RetryPolicy
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

COMMANDS = {
    "populate": "Create data (trainers, types, Pokémon, captures)",
    "delete": "Delete every record from the database",
    "repopulate": "Delete everything, then create the data again",
    "test": "Run the API checks against the existing data",
}

BANNER = """
╔════════════════════════════════════════════════╗
║         🎮 Pokédex Database Manager 🎮         ║
╚════════════════════════════════════════════════╝
"""


def usage() -> str:
    lines = ["Usage: pokedex-seed <command> [API_URL] [CONSUMER_URL]", "", "Commands:"]
    lines += [f"  {name:<11} - {help_text}" for name, help_text in COMMANDS.items()]
    lines += [
        "",
        "Examples:",
        "  pokedex-seed populate",
        "  pokedex-seed repopulate --pokemon-count 30",
        f"  pokedex-seed test {DEFAULT_API_URL} {DEFAULT_CONSUMER_URL}",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokedex-seed",
        description="Populate, wipe or smoke-test the Pokédex API",
        epilog=usage(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", default="populate")
    parser.add_argument("api_url", nargs="?", default=DEFAULT_API_URL)
    parser.add_argument("consumer_url", nargs="?", default=DEFAULT_CONSUMER_URL)
    parser.add_argument("--pokemon-count", type=int, default=DEFAULT_POKEMON_COUNT, help="Pokédex numbers 1..N to seed")
    parser.add_argument("--catalog-url", default=DEFAULT_CATALOG_URL, help="PokeAPI base URL")
    parser.add_argument("--catalog-delay", type=float, default=DEFAULT_CATALOG_DELAY, help="Seconds to wait after each PokeAPI call")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for capture generation")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    return parser


def _dispatch(args: argparse.Namespace, transport: Optional[httpx.BaseTransport]) -> int:
    retry = RetryPolicy()
    with ApiClient(args.api_url, retry=retry, transport=transport) as api:
        if args.command == "delete":
            return run_delete(api)
        if args.command == "test":
            with ApiClient(args.consumer_url, retry=retry, transport=transport) as consumer:
                return run_test(api, consumer)

        ctx = SeedContext.create(pokemon_count=args.pokemon_count, catalog_delay=args.catalog_delay, seed=args.seed)
        with CatalogClient(args.catalog_url, retry=retry, transport=transport) as catalog:
            if args.command == "repopulate":
                return run_repopulate(api, catalog, ctx)
            return run_populate(api, catalog, ctx)


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(json_enabled=args.log_json, level_value=args.log_level)

    if args.command not in COMMANDS:
        print(f"❌ Invalid command: {args.command}\n")
        print(usage())
        return 1

    print(BANNER)
    try:
        return _dispatch(args, transport)
    except SeedingAborted as exc:
        logger.error("Command aborted", extra={"command": args.command, "reason": str(exc)})
        return 1
    except Exception as exc:  # noqa: BLE001 - report anything unexpected and exit non-zero
        logger.exception("Unhandled error", extra={"command": args.command})
        print(f"❌ Fatal error: {exc}")
        return 1
