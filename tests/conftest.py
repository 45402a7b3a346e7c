"""
pytest Fixtures for Bookgraph Tests

Shared fixtures used across all test files.

The REST store is replaced by FakeJsonServer (tests/json_server.py), served
through httpx.MockTransport. Each test gets a freshly seeded store, so tests
never see each other's writes.

Fixtures:
- json_server: the seeded in-memory store (inspect .rows() and .calls())
- rest: a RestClient wired to json_server, for service-level tests
- client: a FastAPI TestClient whose REST client dependency is overridden
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["ENVIRONMENT"] = "development"
os.environ["TOKEN_LOCATION"] = "both"

from collections.abc import AsyncGenerator, Generator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from bookgraph.dependencies import get_rest_client
from bookgraph.main import app
from bookgraph.services.rest_client import RestClient
from bookgraph.services.security import create_access_token, hash_password
from tests.json_server import FakeJsonServer

STORE_URL = "http://store.test"

ADA_PASSWORD = "Analytical1!"
TERRY_PASSWORD = "Flying-Circus9"


# =============================================================================
# SAMPLE DATA
# =============================================================================


@pytest.fixture(scope="session")
def password_hashes() -> dict[str, str]:
    """bcrypt is slow on purpose, so hash the seed passwords only once."""
    return {
        "ada": hash_password(ADA_PASSWORD),
        "terryj": hash_password(TERRY_PASSWORD),
    }


@pytest.fixture
def seed(password_hashes: dict[str, str]) -> dict[str, list[dict[str, Any]]]:
    """The collections every test starts with."""
    return {
        "authors": [
            {"id": 1, "name": "Ursula K. Le Guin"},
            {"id": 2, "name": "Terry Pratchett"},
            {"id": 3, "name": "Neil Gaiman"},
            {"id": 4, "name": "Émile Ajar"},
        ],
        "books": [
            {"id": 1, "title": "A Wizard of Earthsea", "genre": "FANTASY"},
            {
                "id": 2,
                "title": "Good Omens",
                "genre": "FANTASY",
                "summary": "The end of the world is nigh.",
            },
            {"id": 3, "title": "Mort", "genre": "FANTASY"},
            {"id": 4, "title": "The Dispossessed", "genre": "SCIENCE_FICTION"},
        ],
        "bookAuthors": [
            {"id": 1, "authorId": 1, "bookId": 1},
            {"id": 2, "authorId": 2, "bookId": 2},
            {"id": 3, "authorId": 3, "bookId": 2},
            {"id": 4, "authorId": 2, "bookId": 3},
            {"id": 5, "authorId": 1, "bookId": 4},
        ],
        "users": [
            {
                "id": 1,
                "email": "ada@example.com",
                "name": "Ada Lovelace",
                "password": password_hashes["ada"],
                "username": "ada",
            },
            {
                "id": 2,
                "email": "terry@example.com",
                "name": "Terry Jones",
                "password": password_hashes["terryj"],
                "username": "terryj",
            },
        ],
        "reviews": [
            {
                "id": 1,
                "bookId": 1,
                "userId": 1,
                "rating": 5,
                "text": "A classic.",
                "createdAt": "2024-01-10T09:00:00.000Z",
            },
            {
                "id": 2,
                "bookId": 1,
                "userId": 2,
                "rating": 4,
                "createdAt": "2024-02-01T18:30:00.000Z",
            },
        ],
        "userBooks": [
            {"id": 1, "bookId": 1, "userId": 1, "createdAt": "2024-01-05T10:00:00.000Z"},
        ],
    }


# =============================================================================
# REST STORE FIXTURES
# =============================================================================


@pytest.fixture
def json_server(seed: dict[str, list[dict[str, Any]]]) -> FakeJsonServer:
    """A freshly seeded in-memory REST store."""
    return FakeJsonServer(seed)


@pytest.fixture
def rest(json_server: FakeJsonServer) -> RestClient:
    """A RestClient talking to the in-memory store."""
    http = httpx.AsyncClient(base_url=STORE_URL, transport=json_server.transport())
    return RestClient(http)


@pytest.fixture
def client(json_server: FakeJsonServer) -> Generator[TestClient, None, None]:
    """
    Create a test client backed by the in-memory store.

    We override the get_rest_client dependency so the GraphQL context
    receives a RestClient wired to json_server.
    """

    async def override_get_rest_client() -> AsyncGenerator[RestClient, None]:
        async with httpx.AsyncClient(
            base_url=STORE_URL, transport=json_server.transport()
        ) as http:
            yield RestClient(http)

    app.dependency_overrides[get_rest_client] = override_get_rest_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# AUTH HELPERS
# =============================================================================


@pytest.fixture
def ada_token() -> str:
    return create_access_token(1, "ada")


@pytest.fixture
def terry_token() -> str:
    return create_access_token(2, "terryj")
