from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import SeedingAborted
from .fixtures import TRAINERS
from .http import ApiClient

logger = logging.getLogger(__name__)

DELETED_STATUSES = (200, 204)

# Most dependent first
TEARDOWN_ORDER: List[Tuple[str, str]] = [
    ("/caught-pokemons", "captures"),
    ("/pokemons", "Pokémon"),
    ("/types", "types"),
    ("/trainers", "trainers"),
]


@dataclass
class DeleteSummary:
    label: str
    deleted: int = 0
    failed: int = 0


def authenticate_for_teardown(api: ApiClient, now_ms: Optional[int] = None) -> None:
    """Obtain a session for the protected list/delete endpoints.

    Registers a throwaway account, falling back to the first fixed trainer.
    """
    print("\n🔐 Creating a temporary account for deletion...")
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    registered = api.post(
        "/auth/register",
        {"name": "Temp Delete User", "email": f"temp_delete_{stamp}@pokemon.com", "password": "temppassword123"},
    )
    temp_id = registered.field("id")
    if temp_id:
        print(f"  ✓ Temporary account created (ID: {temp_id})")
        return

    trainer = TRAINERS[0]
    login = api.post("/auth/login", trainer.credentials())
    if not login.field("trainerId"):
        print("  ✗ Unable to log in to delete the data")
        raise SeedingAborted("no session available for teardown")
    print(f"  ✓ Logged in as {trainer.name}")


def delete_all(api: ApiClient, collection: str, label: str) -> DeleteSummary:
    print(f"\n🗑️  Deleting {label}...")
    summary = DeleteSummary(label=label)

    listing = api.get(collection)
    if not isinstance(listing.data, list):
        logger.warning("Listing is not an array", extra={"path": collection, "status_code": listing.status})
        print(f"  ⚠ Unable to list {label}")
        return summary

    for record in listing.data:
        record_id = record.get("id") if isinstance(record, dict) else None
        if record_id is None:
            summary.failed += 1
            logger.info("Listed record has no id", extra={"path": collection})
            continue
        result = api.delete(f"{collection}/{record_id}")
        if result.status in DELETED_STATUSES:
            summary.deleted += 1
        else:
            summary.failed += 1
            logger.info("Delete rejected", extra={"path": collection, "record_id": record_id, "status_code": result.status})

    errors = f", {summary.failed} errors" if summary.failed else ""
    print(f"  ✓ {summary.deleted} {label} deleted{errors}")
    return summary


def delete_everything(api: ApiClient) -> List[DeleteSummary]:
    return [delete_all(api, collection, label) for collection, label in TEARDOWN_ORDER]
