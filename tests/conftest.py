# tests/conftest.py
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from catalog_api.config import Settings
from catalog_api.database import InMemoryProductStore
from catalog_api.main import create_app
from catalog_api.orchestrator import ProductOrchestrator


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def store() -> InMemoryProductStore:
    """Fresh seed catalog per test."""
    return InMemoryProductStore()


@pytest.fixture
def orchestrator(store: InMemoryProductStore) -> ProductOrchestrator:
    return ProductOrchestrator(store)


@pytest.fixture
def app(store: InMemoryProductStore, settings: Settings):
    return create_app(store=store, settings=settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
