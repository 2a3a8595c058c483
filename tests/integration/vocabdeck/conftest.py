import pytest
from fastapi.testclient import TestClient

from vocabdeck.services import VocabDeckService


@pytest.fixture
def service(settings) -> VocabDeckService:
    return VocabDeckService(settings=settings)


@pytest.fixture
def client(service):
    with TestClient(service.app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register an account and return the ``{"token", "user"}`` body."""

    def _register(username: str = "alice", password: str = "secret") -> dict:
        response = client.post("/auth/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register) -> dict:
    return {"Authorization": f"Bearer {register()['token']}"}


@pytest.fixture
def other_auth_headers(register) -> dict:
    return {"Authorization": f"Bearer {register('bob', 'hunter2')['token']}"}
