import pytest
from fastapi.testclient import TestClient

from api import create_app
from library import Library, SEED_BOOKS


@pytest.fixture
def lib():
    # Fresh, empty store for every test
    return Library()


@pytest.fixture
def seeded_lib():
    return Library(SEED_BOOKS)


@pytest.fixture
def client(seeded_lib):
    # Each test gets its own app around its own seeded store
    return TestClient(create_app(seeded_lib))
