#!/usr/bin/env python3
"""
Manage the Pokédex database through its REST API:
  - populate:   trainers, types, Pokémon (from PokeAPI) and random captures
  - delete:     remove every record
  - repopulate: delete, then populate
  - test:       run the end-to-end API checks

This is a thin entrypoint that delegates to the CLI implementation.
"""
from __future__ import annotations

from pokedex_seeding.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
