"""Common pytest fixtures.

Every client talks to in-memory fakes through ``httpx.MockTransport``; no
network access and no real sleeping.
"""

import random
from collections.abc import Iterator

import httpx
import pytest
from fakes import FakeCatalog, FakeConsumerService, FakePokedexService, Router

from pokedex_seeding.catalog import CatalogClient
from pokedex_seeding.context import SeedContext
from pokedex_seeding.fixtures import DEFAULT_API_URL, DEFAULT_CATALOG_URL, DEFAULT_CONSUMER_URL
from pokedex_seeding.http import ApiClient, RetryPolicy

SEED_COUNT = 12


@pytest.fixture
def service() -> FakePokedexService:
    return FakePokedexService()


@pytest.fixture
def consumer_service(service: FakePokedexService) -> FakeConsumerService:
    return FakeConsumerService(service)


@pytest.fixture
def catalog_service() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def transport(service, consumer_service, catalog_service) -> httpx.MockTransport:
    return httpx.MockTransport(Router(service, consumer_service, catalog_service))


@pytest.fixture
def sleeps() -> list:
    return []


@pytest.fixture
def retry(sleeps) -> RetryPolicy:
    return RetryPolicy(sleep=sleeps.append)


@pytest.fixture
def api(transport, retry) -> Iterator[ApiClient]:
    with ApiClient(DEFAULT_API_URL, retry=retry, transport=transport) as client:
        yield client


@pytest.fixture
def consumer(transport, retry) -> Iterator[ApiClient]:
    with ApiClient(DEFAULT_CONSUMER_URL, retry=retry, transport=transport) as client:
        yield client


@pytest.fixture
def catalog(transport, retry) -> Iterator[CatalogClient]:
    with CatalogClient(DEFAULT_CATALOG_URL, retry=retry, transport=transport) as client:
        yield client


@pytest.fixture
def ctx() -> SeedContext:
    return SeedContext(pokemon_count=SEED_COUNT, catalog_delay=0.1, rng=random.Random(7), sleep=lambda _: None)
