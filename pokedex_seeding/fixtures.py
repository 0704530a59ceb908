from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

DEFAULT_API_URL = "http://localhost:8080/api"
DEFAULT_CONSUMER_URL = "http://localhost:8081/api"
DEFAULT_CATALOG_URL = "https://pokeapi.co/api/v2"

# Generation 1
DEFAULT_POKEMON_COUNT = 151
# Pause after each PokeAPI call, in seconds
DEFAULT_CATALOG_DELAY = 0.1

RETRY_ATTEMPTS = 3
RETRY_BACKOFF_SECONDS = 1.0

CAPTURES_PER_TRAINER: Tuple[int, int] = (3, 6)
MISSING_ID = 999999


@dataclass(frozen=True)
class TrainerIdentity:
    name: str
    email: str
    password: str

    def credentials(self) -> dict:
        return {"email": self.email, "password": self.password}

    def registration(self) -> dict:
        return {"name": self.name, "email": self.email, "password": self.password}


TRAINERS: List[TrainerIdentity] = [
    TrainerIdentity("Ash Ketchum", "ash@pokemon.com", "password1"),
    TrainerIdentity("Misty", "misty@pokemon.com", "password2"),
    TrainerIdentity("Brock", "brock@pokemon.com", "password3"),
    TrainerIdentity("Gary Oak", "gary@pokemon.com", "password4"),
    TrainerIdentity("May", "may@pokemon.com", "password5"),
    TrainerIdentity("Dawn", "dawn@pokemon.com", "password6"),
    TrainerIdentity("Serena", "serena@pokemon.com", "password7"),
    TrainerIdentity("Clemont", "clemont@pokemon.com", "password8"),
    TrainerIdentity("Lillie", "lillie@pokemon.com", "password9"),
    TrainerIdentity("Red", "red@pokemon.com", "password10"),
]

POKEMON_TYPES: List[str] = [
    "Normal", "Fire", "Water", "Electric", "Grass", "Ice",
    "Fighting", "Poison", "Ground", "Flying", "Psychic", "Bug",
    "Rock", "Ghost", "Dragon", "Dark", "Steel", "Fairy",
]
