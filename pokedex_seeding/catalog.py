"""PokeAPI access and normalisation of its records into the Pokédex service shape."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from .errors import CatalogError
from .fixtures import DEFAULT_CATALOG_URL
from .http import RetryPolicy

logger = logging.getLogger(__name__)

TRACKED_STATS = ("hp", "attack", "defense", "speed")


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _objects(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _name_of(value: Any) -> Optional[str]:
    return value.get("name") if isinstance(value, dict) else None


class CatalogPokemon(BaseModel):
    model_config = ConfigDict(frozen=True)

    pokedex_number: int
    name: str
    hp: Optional[int] = None
    attack: Optional[int] = None
    defense: Optional[int] = None
    speed: Optional[int] = None
    types: List[str] = []

    @field_validator("name")
    @classmethod
    def _display_name(cls, value: str) -> str:
        return _capitalize(value)

    @field_validator("types")
    @classmethod
    def _type_labels(cls, value: List[str]) -> List[str]:
        return [_capitalize(v) for v in value]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CatalogPokemon":
        stats: Dict[str, int] = {}
        for entry in _objects(payload.get("stats")):
            stat_name = _name_of(entry.get("stat"))
            if stat_name in TRACKED_STATS:
                stats[stat_name] = entry.get("base_stat")
        types = [_name_of(t.get("type")) or "" for t in _objects(payload.get("types"))]
        return cls(pokedex_number=payload["id"], name=payload["name"], types=types, **stats)

    def creation_payload(self) -> Dict[str, Any]:
        # Type labels are not part of the creation contract
        return {
            "pokedexNumber": self.pokedex_number,
            "name": self.name,
            "hp": self.hp,
            "attack": self.attack,
            "defense": self.defense,
            "speed": self.speed,
        }


class CatalogClient:
    def __init__(
        self,
        base_url: str = DEFAULT_CATALOG_URL,
        retry: Optional[RetryPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.retry = retry or RetryPolicy()
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def fetch_pokemon(self, number: int) -> CatalogPokemon:
        url = f"{self.base_url}/pokemon/{number}"
        logger.debug("PokeAPI GET", extra={"url": url})
        resp: httpx.Response = self.retry.call(self._http.get, url)
        if not resp.is_success:
            raise CatalogError(number, resp.status_code)
        payload = resp.json()
        if not isinstance(payload, dict):
            raise CatalogError(number, resp.status_code, f"PokeAPI returned a non-object body for #{number}")
        return CatalogPokemon.from_payload(payload)
