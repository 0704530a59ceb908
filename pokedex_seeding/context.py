from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .fixtures import DEFAULT_CATALOG_DELAY, DEFAULT_POKEMON_COUNT


@dataclass
class SeedContext:
    """Identifiers collected during one populate run, plus its knobs."""

    pokemon_count: int = DEFAULT_POKEMON_COUNT
    catalog_delay: float = DEFAULT_CATALOG_DELAY
    rng: random.Random = field(default_factory=random.Random)
    sleep: Callable[[float], None] = time.sleep

    trainer_ids: List[Any] = field(default_factory=list)
    type_ids: Dict[str, Any] = field(default_factory=dict)
    pokemon_ids: List[Any] = field(default_factory=list)

    def fresh(self) -> "SeedContext":
        """Same settings and RNG, empty caches."""
        return SeedContext(
            pokemon_count=self.pokemon_count,
            catalog_delay=self.catalog_delay,
            rng=self.rng,
            sleep=self.sleep,
        )

    @classmethod
    def create(
        cls,
        pokemon_count: int = DEFAULT_POKEMON_COUNT,
        catalog_delay: float = DEFAULT_CATALOG_DELAY,
        seed: Optional[int] = None,
    ) -> "SeedContext":
        return cls(pokemon_count=pokemon_count, catalog_delay=catalog_delay, rng=random.Random(seed))
