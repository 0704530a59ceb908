"""Seeding and smoke-testing tool for the Pokédex REST service."""

__version__ = "0.1.0"
