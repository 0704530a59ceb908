from __future__ import annotations

from typing import Optional


class SeedingError(Exception):
    """Base class for errors raised by the seeding tool."""


class SeedingAborted(SeedingError):
    """A step the rest of the command depends on could not be completed."""


class CatalogError(SeedingError):
    def __init__(self, number: int, status_code: int, message: Optional[str] = None) -> None:
        self.number = number
        self.status_code = status_code
        super().__init__(message or f"PokeAPI error for #{number}: HTTP {status_code}")
